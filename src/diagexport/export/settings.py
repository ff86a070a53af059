"""
Export Settings
===============

Options recognized by the exporter, plus the output directory check
every batch runs before touching any row.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Union

from .errors import OutputDirectoryError
from .excel_exporter import SHEET_CONFLICT_POLICIES, SHEET_CONFLICT_REPLACE
from .models import ExportFormat


# =============================================================================
# OUTPUT DIRECTORY
# =============================================================================

def ensure_output_dir(path: Union[str, Path]) -> Path:
    """
    Create the output directory (and parents) if it doesn't exist.

    Returns:
        Absolute path to the directory.

    Raises:
        OutputDirectoryError: If the directory cannot be created, or the
                              path exists and is not a directory.
    """
    output_path = Path(path)
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(output_path, str(e)) from e

    return output_path.resolve()


# =============================================================================
# SETTINGS
# =============================================================================

def default_suffix() -> str:
    """Timestamp with millisecond precision, e.g. 20261018153012045."""
    now = datetime.now()
    return now.strftime("%Y%m%d%H%M%S") + f"{now.microsecond // 1000:03d}"


@dataclass
class ExportSettings:
    """
    Options for one export run.

    Attributes:
        output_format: Tabular format, Excel or Csv.
        output_dir: Base path for every generated file; created if absent.
        suffix: Token appended to every file name of the run.
        no_plan_export: Extract "Query Plan" values without writing them.
        no_query_export: Extract "Complete Query Text" values without
                         writing them.
        enable_exception: Raise ExportBatchError at the end of a batch
                          with failures instead of only logging them.
        sheet_conflict: What to do when a worksheet title already exists
                        in the workbook: "replace" or "rename".
    """

    output_format: ExportFormat = ExportFormat.EXCEL
    output_dir: str = "output"
    suffix: str = field(default_factory=default_suffix)
    no_plan_export: bool = False
    no_query_export: bool = False
    enable_exception: bool = False
    sheet_conflict: str = SHEET_CONFLICT_REPLACE

    def __post_init__(self) -> None:
        self.output_format = ExportFormat(self.output_format)
        self.output_dir = str(self.output_dir)
        if not self.suffix:
            self.suffix = default_suffix()
        if self.sheet_conflict not in SHEET_CONFLICT_POLICIES:
            raise ValueError(
                f"sheet_conflict must be one of {SHEET_CONFLICT_POLICIES}, "
                f"got {self.sheet_conflict!r}"
            )

    def with_overrides(self, **overrides: Any) -> "ExportSettings":
        """Copy with the given fields replaced. None values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown export settings: {sorted(unknown)}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
