"""
Export Orchestrator
===================

Drives the export of a stream of diagnostic result rows:

    Init   -> output directory + backend checked once (fatal on failure)
    Row    -> validate -> extract -> route artifacts -> export residual

Rows are consumed lazily, one at a time. A failing row is recorded and
the batch moves on; only the two init checks stop a batch.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from .artifact_writer import route_artifacts
from .columns import split_special_columns
from .errors import ExportBatchError, ExportError
from .excel_exporter import probe_excel_backend
from .models import ArtifactKind, DiagnosticResultRow, ExportFormat
from .settings import ExportSettings, ensure_output_dir
from .tabular import export_tabular


logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

STAGE_VALIDATE = "validate"
STAGE_ARTIFACT = "artifact"
STAGE_TABULAR = "tabular"


@dataclass
class RowFailure:
    """A per-row failure with enough context to diagnose it."""

    row_name: Optional[str]
    number: Optional[int]
    stage: str
    reason: str
    path: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "row_name": self.row_name,
            "number": self.number,
            "stage": self.stage,
            "reason": self.reason,
            "path": self.path,
        }


@dataclass
class ExportSummary:
    """Outcome of one batch."""

    rows_processed: int = 0
    rows_skipped: int = 0
    plan_files: list[str] = field(default_factory=list)
    query_files: list[str] = field(default_factory=list)
    tabular_files: list[str] = field(default_factory=list)
    failures: list[RowFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def add_file(self, bucket: list[str], path: Union[str, Path]) -> None:
        path = str(path)
        if path not in bucket:
            bucket.append(path)


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class DiagnosticExporter:
    """
    Exports diagnostic result rows to artifact files plus CSV or Excel.

    Construction performs the fatal precondition checks, so a missing
    output directory or Excel backend raises before any row is read.

    Raises:
        OutputDirectoryError: Output directory cannot be created.
        BackendUnavailableError: Excel requested but openpyxl is missing.
    """

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or ExportSettings()
        self.output_dir = ensure_output_dir(self.settings.output_dir)
        if self.settings.output_format is ExportFormat.EXCEL:
            probe_excel_backend()

    def export(self, rows: Iterable[Any]) -> ExportSummary:
        """
        Export every row of `rows`.

        Args:
            rows: DiagnosticResultRow instances or mappings with the
                  upstream keys (Name, Number, SqlInstance, ...). Any
                  iterable works; it is consumed once.

        Returns:
            ExportSummary for the batch.

        Raises:
            ExportBatchError: If enable_exception is set and any row failed.
        """
        summary = ExportSummary()

        for position, raw in enumerate(rows, start=1):
            self._export_row(position, raw, summary)

        if summary.failures:
            logger.error(
                "Export finished with %d failure(s) across %d row(s)",
                len(summary.failures), summary.rows_processed + summary.rows_skipped
            )
            if self.settings.enable_exception:
                raise ExportBatchError(summary)
        else:
            logger.info(
                "Export finished: %d row(s) exported, %d skipped",
                summary.rows_processed, summary.rows_skipped
            )

        return summary

    # -------------------------------------------------------------------------
    # Per row
    # -------------------------------------------------------------------------

    def _export_row(self, position: int, raw: Any, summary: ExportSummary) -> None:
        row = self._validate(raw, summary)
        if row is None:
            return

        logger.info("Exporting %d: %s", position, row.name)

        if not row.has_result:
            logger.info("%s result was empty. No files created.", row.name)
            summary.rows_skipped += 1
            return

        settings = self.settings
        extracted = split_special_columns(
            row.result,
            suppress_plan=settings.no_plan_export,
            suppress_query=settings.no_query_export,
        )

        for column in extracted.columns:
            bucket = summary.plan_files if column.kind is ArtifactKind.PLAN else summary.query_files
            try:
                written = route_artifacts(
                    column.values,
                    column.kind,
                    row,
                    self.output_dir,
                    settings.suffix,
                    suppressed=column.suppressed,
                )
            except ExportError as e:
                self._record(summary, row, STAGE_ARTIFACT, e)
                continue
            for path in written:
                summary.add_file(bucket, path)

        if not any(len(record) for record in extracted.records):
            logger.warning("%s has no columns left after extraction. No tabular file created.", row.name)
            summary.rows_processed += 1
            return

        try:
            path = export_tabular(
                extracted.records,
                settings.output_format,
                row,
                self.output_dir,
                settings.suffix,
                settings.sheet_conflict,
            )
        except ExportError as e:
            self._record(summary, row, STAGE_TABULAR, e)
        else:
            summary.add_file(summary.tabular_files, path)

        summary.rows_processed += 1

    def _validate(self, raw: Any, summary: ExportSummary) -> Optional[DiagnosticResultRow]:
        if isinstance(raw, DiagnosticResultRow):
            return raw

        try:
            if isinstance(raw, Mapping):
                return DiagnosticResultRow.model_validate(dict(raw))
            return DiagnosticResultRow.model_validate(raw, from_attributes=True)
        except ValidationError as e:
            name = raw.get("Name", raw.get("name")) if isinstance(raw, Mapping) else None
            number = raw.get("Number", raw.get("number")) if isinstance(raw, Mapping) else None
            failure = RowFailure(
                row_name=name,
                number=number if isinstance(number, int) else None,
                stage=STAGE_VALIDATE,
                reason=str(e),
            )
            logger.error("Invalid diagnostic row %r: %s", name, e)
            summary.failures.append(failure)
            return None

    def _record(
        self,
        summary: ExportSummary,
        row: DiagnosticResultRow,
        stage: str,
        error: ExportError
    ) -> None:
        logger.error("Failed to export %s (%s) to %s: %s", row.name, stage, error.path, error.reason)
        summary.failures.append(RowFailure(
            row_name=row.name,
            number=row.number,
            stage=stage,
            reason=error.reason,
            path=error.path,
        ))


# =============================================================================
# CONVENIENCE
# =============================================================================

def export_diagnostic_results(
    rows: Iterable[Any],
    settings: Optional[ExportSettings] = None,
    **options: Any
) -> ExportSummary:
    """
    Export a batch of rows in one call.

    Keyword options override fields of `settings` (output_format,
    output_dir, suffix, no_plan_export, no_query_export,
    enable_exception, sheet_conflict).
    """
    settings = (settings or ExportSettings()).with_overrides(**options)
    return DiagnosticExporter(settings).export(rows)
