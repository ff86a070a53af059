"""
API Module
==========

API routes and schemas.
"""

from .schemas import (
    ExportRequest,
    ExportResponse,
    ExportedFiles,
    FailureInfo,
    HealthResponse,
    VersionResponse,
    ErrorResponse,
    HTTPErrorResponse,
)

__all__ = [
    "ExportRequest",
    "ExportResponse",
    "ExportedFiles",
    "FailureInfo",
    "HealthResponse",
    "VersionResponse",
    "ErrorResponse",
    "HTTPErrorResponse",
]
