"""
Application Configuration
=========================

Central configuration for the API.
"""

import os
from pathlib import Path
from typing import Any

from diagexport.export.models import ExportFormat
from diagexport.export.settings import ExportSettings, default_suffix


# =============================================================================
# VERSION
# =============================================================================

VERSION = "1.0.0"
APP_NAME = "Diagnostic Query Exporter"


# =============================================================================
# OUTPUT DIRECTORY
# =============================================================================

# Default output directory (can be overridden via environment variable)
OUTPUT_DIR = os.environ.get(
    "DQX_OUTPUT_DIR",
    str(Path(__file__).parent.parent.parent.parent / "output")
)

LOG_LEVEL = os.environ.get("DQX_LOG_LEVEL", "INFO").upper()


# =============================================================================
# EXPORT SETTINGS
# =============================================================================

def _env_flag(name: str, default: bool) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


def load_settings(**overrides: Any) -> ExportSettings:
    """
    Load ExportSettings from environment variables, then apply overrides.

    Recognized variables:
        DQX_OUTPUT_FORMAT       (excel|csv)
        DQX_OUTPUT_DIR          (directory path)
        DQX_SUFFIX              (file name suffix)
        DQX_NO_PLAN_EXPORT      ("true" / "false" / "1" / "0")
        DQX_NO_QUERY_EXPORT     ("true" / "false" / "1" / "0")
        DQX_ENABLE_EXCEPTION    ("true" / "false" / "1" / "0")
        DQX_SHEET_CONFLICT      (replace|rename)

    Overrides set to None are ignored.
    """
    settings = ExportSettings(
        output_format=os.getenv("DQX_OUTPUT_FORMAT", ExportFormat.EXCEL.value),
        output_dir=os.getenv("DQX_OUTPUT_DIR", OUTPUT_DIR),
        suffix=os.getenv("DQX_SUFFIX") or default_suffix(),
        no_plan_export=_env_flag("DQX_NO_PLAN_EXPORT", False),
        no_query_export=_env_flag("DQX_NO_QUERY_EXPORT", False),
        enable_exception=_env_flag("DQX_ENABLE_EXCEPTION", False),
        sheet_conflict=os.getenv("DQX_SHEET_CONFLICT", "replace").strip().lower(),
    )
    return settings.with_overrides(**overrides)
