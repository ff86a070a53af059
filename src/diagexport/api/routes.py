"""
API Routes
==========

Endpoint definitions for the Diagnostic Query Exporter API.

This module wires requests to the export pipeline without adding
business logic.
"""

from fastapi import APIRouter

from .schemas import (
    ExportRequest,
    ExportResponse,
    ExportedFiles,
    FailureInfo,
    HealthResponse,
    HTTPErrorResponse,
    VersionResponse,
)

from diagexport.export import DiagnosticExporter

# Import config and utilities
from diagexport.app import config as app_config
from diagexport.app import exceptions as app_exceptions


# =============================================================================
# ROUTER
# =============================================================================

router = APIRouter()


# =============================================================================
# ENDPOINTS
# =============================================================================

ERROR_RESPONSES = {
    500: {"model": HTTPErrorResponse, "description": "Export failed"},
    503: {"model": HTTPErrorResponse, "description": "Export backend not installed"},
}


@router.post(
    "/diagnostics/export",
    response_model=ExportResponse,
    responses=ERROR_RESPONSES,
)
def export_diagnostics(request: ExportRequest) -> ExportResponse:
    """
    Export diagnostic result rows to the configured output directory.

    Invalid or failing rows are reported in `failures` and do not stop
    the batch, unless enable_exception is set.
    """
    try:
        settings = app_config.load_settings(
            output_format=request.output_format,
            suffix=request.suffix,
            no_plan_export=request.no_plan_export,
            no_query_export=request.no_query_export,
            enable_exception=request.enable_exception,
            sheet_conflict=request.sheet_conflict,
        )

        summary = DiagnosticExporter(settings).export(request.rows)

        return ExportResponse(
            status="success" if summary.ok else "partial",
            suffix=settings.suffix,
            files=ExportedFiles(
                plans=summary.plan_files,
                queries=summary.query_files,
                tabular=summary.tabular_files,
            ),
            rows_processed=summary.rows_processed,
            rows_skipped=summary.rows_skipped,
            failures=[FailureInfo(**f.to_dict()) for f in summary.failures],
        )

    except Exception as e:
        raise app_exceptions.get_http_exception(e)


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok")


@router.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    """Get API version."""
    return VersionResponse(version=app_config.VERSION, name=app_config.APP_NAME)
