"""
Export Errors
=============

Exception hierarchy for the diagnostic export pipeline.

Fatal errors (directory, backend) abort a batch before any row is read.
ExportError subclasses are per-row and never abort a batch.
"""

from typing import Any, Optional


# =============================================================================
# BASE
# =============================================================================

class DiagnosticExportError(Exception):
    """Base class for all export pipeline errors."""
    pass


# =============================================================================
# FATAL / PRECONDITION
# =============================================================================

class OutputDirectoryError(DiagnosticExportError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: Any, reason: str = ""):
        self.path = str(path)
        self.reason = reason
        message = f"Failed to create output directory {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class BackendUnavailableError(DiagnosticExportError):
    """Raised when the export backend for the requested format is missing."""

    def __init__(self, backend: str, reason: str = ""):
        self.backend = backend
        self.reason = reason
        message = f"Export backend '{backend}' is not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


# =============================================================================
# PER-ROW
# =============================================================================

class ExportError(DiagnosticExportError):
    """Raised when a single target file cannot be written."""

    def __init__(self, reason: str, path: Optional[Any] = None):
        self.reason = reason
        self.path = str(path) if path is not None else None
        if self.path:
            super().__init__(f"Failed to write {self.path}: {reason}")
        else:
            super().__init__(reason)


class ArtifactExportError(ExportError):
    """Raised when a .sqlplan or .sql artifact cannot be written."""
    pass


class CsvExportError(ExportError):
    """Raised when CSV export fails."""
    pass


class ExcelExportError(ExportError):
    """Raised when Excel export fails."""
    pass


# =============================================================================
# BATCH
# =============================================================================

class ExportBatchError(DiagnosticExportError):
    """
    Raised after a batch when error surfacing is enabled and any row failed.

    Carries the ExportSummary so callers get the structured failures.
    """

    def __init__(self, summary: Any):
        self.summary = summary
        self.failures = list(summary.failures)
        super().__init__(
            f"{len(self.failures)} failure(s) while exporting diagnostic results"
        )
