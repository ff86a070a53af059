"""
Application Exceptions
======================

Maps export exceptions to HTTP status codes.
"""

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from diagexport.api.schemas import ErrorResponse, FailureInfo


# =============================================================================
# EXCEPTION MAPPING
# =============================================================================

# Maps exception class names to (status_code, user_message)
EXCEPTION_MAP = {
    # Fatal preconditions
    "OutputDirectoryError": (500, "Output directory could not be created."),
    "BackendUnavailableError": (503, "The requested export backend is not installed."),

    # Per-row export failures
    "ArtifactExportError": (500, "Failed to write plan or query text file."),
    "CsvExportError": (500, "Failed to export CSV."),
    "ExcelExportError": (500, "Failed to export Excel workbook."),
    "ExportError": (500, "Failed to export diagnostic results."),

    # Error surfacing mode
    "ExportBatchError": (500, "One or more diagnostic rows failed to export."),

    # Bad input
    "ValidationError": (422, "Invalid diagnostic result rows."),
    "ValueError": (422, "Invalid export options."),
}


def _failures_of(exc: Exception) -> list[FailureInfo]:
    return [FailureInfo(**f.to_dict()) for f in getattr(exc, "failures", [])]


def error_response(exc: Exception) -> tuple[int, ErrorResponse]:
    """
    Build the status code and structured body for an exception.

    Args:
        exc: The caught exception.

    Returns:
        (status_code, ErrorResponse). Per-row failures carried by the
        exception are included in the body.
    """
    exc_name = type(exc).__name__

    if exc_name in EXCEPTION_MAP:
        status_code, user_message = EXCEPTION_MAP[exc_name]
    else:
        status_code = 500
        user_message = "Internal system error."

    body = ErrorResponse(
        message=user_message,
        detail=str(exc),
        failures=_failures_of(exc),
    )
    return status_code, body


def get_http_exception(exc: Exception) -> HTTPException:
    """
    Convert an internal exception to an HTTPException.

    Args:
        exc: The caught exception.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    status_code, body = error_response(exc)
    return HTTPException(status_code=status_code, detail=body.model_dump())


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for FastAPI.

    Catches all unhandled exceptions and returns structured error response.
    """
    status_code, body = error_response(exc)
    return JSONResponse(status_code=status_code, content=body.model_dump())
