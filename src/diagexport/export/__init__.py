"""
Export Module
=============

Diagnostic result export pipeline.
Splits "Query Plan" / "Complete Query Text" columns out into .sqlplan and
.sql files and writes the remaining columns to CSV or Excel.

This is a deterministic export layer: no query execution, no inference.
"""

from .models import (
    DiagnosticResultRow,
    Record,
    ExportFormat,
    ArtifactKind,
    QUERY_PLAN_COLUMN,
    QUERY_TEXT_COLUMN,
)

from .sanitizer import (
    sanitize_filename,
    sanitize_sheet_name,
)

from .columns import (
    extract_field,
    extract_column,
    split_special_columns,
    ExtractedColumn,
    ExtractedResult,
)

from .paths import (
    artifact_path,
    tabular_path,
)

from .artifact_writer import (
    route_artifacts,
    write_artifact,
)

from .csv_exporter import export_to_csv
from .excel_exporter import export_to_excel, probe_excel_backend
from .tabular import export_tabular

from .settings import (
    ExportSettings,
    ensure_output_dir,
    default_suffix,
)

from .orchestrator import (
    DiagnosticExporter,
    ExportSummary,
    RowFailure,
    export_diagnostic_results,
)

from .errors import (
    DiagnosticExportError,
    OutputDirectoryError,
    BackendUnavailableError,
    ExportError,
    ArtifactExportError,
    CsvExportError,
    ExcelExportError,
    ExportBatchError,
)

__all__ = [
    # Model
    "DiagnosticResultRow",
    "Record",
    "ExportFormat",
    "ArtifactKind",
    "QUERY_PLAN_COLUMN",
    "QUERY_TEXT_COLUMN",

    # Naming
    "sanitize_filename",
    "sanitize_sheet_name",
    "artifact_path",
    "tabular_path",

    # Extraction
    "extract_field",
    "extract_column",
    "split_special_columns",
    "ExtractedColumn",
    "ExtractedResult",

    # Writers
    "route_artifacts",
    "write_artifact",
    "export_to_csv",
    "export_to_excel",
    "probe_excel_backend",
    "export_tabular",

    # Orchestration
    "ExportSettings",
    "ensure_output_dir",
    "default_suffix",
    "DiagnosticExporter",
    "ExportSummary",
    "RowFailure",
    "export_diagnostic_results",

    # Errors
    "DiagnosticExportError",
    "OutputDirectoryError",
    "BackendUnavailableError",
    "ExportError",
    "ArtifactExportError",
    "CsvExportError",
    "ExcelExportError",
    "ExportBatchError",
]
