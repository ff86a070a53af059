"""
diagexport

Exports diagnostic query results to .sqlplan / .sql artifacts plus
CSV or Excel tables.

Subpackages:
    - export/  : the export pipeline (no web dependencies)
    - app/     : configuration, exception mapping, FastAPI entry point
    - api/     : HTTP schemas and routes
"""

from .export import (
    DiagnosticExporter,
    DiagnosticResultRow,
    ExportFormat,
    ExportSettings,
    ExportSummary,
    export_diagnostic_results,
)

__all__ = [
    "DiagnosticExporter",
    "DiagnosticResultRow",
    "ExportFormat",
    "ExportSettings",
    "ExportSummary",
    "export_diagnostic_results",
]
