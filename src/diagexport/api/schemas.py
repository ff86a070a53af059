"""
API Request/Response Schemas
============================

Pydantic models for API request and response validation.
"""

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ExportRequest(BaseModel):
    """Request body for POST /diagnostics/export endpoint."""

    rows: list[dict[str, Any]] = Field(
        ...,
        description=(
            "Diagnostic result rows with keys Name, Number, SqlInstance, "
            "DatabaseName, DatabaseSpecific, Result"
        )
    )
    output_format: Literal["excel", "csv"] = Field(
        default="excel",
        description="Tabular output format"
    )
    suffix: Optional[str] = Field(
        default=None,
        description="Token appended to every file name (defaults to a timestamp)"
    )
    no_plan_export: bool = Field(
        default=False,
        description="Do not write 'Query Plan' values to .sqlplan files"
    )
    no_query_export: bool = Field(
        default=False,
        description="Do not write 'Complete Query Text' values to .sql files"
    )
    enable_exception: bool = Field(
        default=False,
        description="Fail the request if any row fails instead of reporting it"
    )
    sheet_conflict: Literal["replace", "rename"] = Field(
        default="replace",
        description="Excel only: replace or rename a worksheet whose title already exists"
    )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ExportedFiles(BaseModel):
    """File paths grouped by kind."""

    plans: list[str] = Field(default_factory=list)
    queries: list[str] = Field(default_factory=list)
    tabular: list[str] = Field(default_factory=list)


class FailureInfo(BaseModel):
    """One per-row failure."""

    row_name: Optional[str] = None
    number: Optional[int] = None
    stage: str
    reason: str
    path: Optional[str] = None


class ExportResponse(BaseModel):
    """
    Response for POST /diagnostics/export.

    status="success" → every row exported or skipped
    status="partial" → at least one row failed; see failures
    """

    status: Literal["success", "partial"]
    suffix: str
    files: ExportedFiles
    rows_processed: int = 0
    rows_skipped: int = 0
    failures: list[FailureInfo] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    status: str = "ok"


class VersionResponse(BaseModel):
    """Response for GET /version endpoint."""

    version: str
    name: str = "Diagnostic Query Exporter"


class ErrorResponse(BaseModel):
    """Standard error response."""

    status: Literal["error"] = "error"
    message: str
    detail: Optional[str] = None
    failures: list[FailureInfo] = Field(default_factory=list)


class HTTPErrorResponse(BaseModel):
    """Body of an error raised from an endpoint as HTTPException."""

    detail: ErrorResponse
