"""
Export Paths
============

File naming templates for every output the exporter produces.

Artifacts (one file per plan / query text element):
    {instance}-{database}-DQ-{number}-{name}-{index}-{suffix}.{ext}
    {instance}-DQ-{number}-{name}-{index}-{suffix}.{ext}

CSV (one file per query):
    {instance}-{database}-DQ-{number}-{name}-{suffix}.csv
    {instance}-DQ-{number}-{name}-{suffix}.csv

Excel (one workbook per instance/database, one sheet per query name):
    {instance}-{database}-DQ-{suffix}.xlsx
    {instance}-DQ-{suffix}.xlsx
"""

from pathlib import Path
from typing import Union

from .models import ArtifactKind, DiagnosticResultRow, ExportFormat
from .sanitizer import sanitize_filename


# =============================================================================
# TEMPLATES
# =============================================================================

DATABASE_ARTIFACT_TEMPLATE = "{instance}-{database}-DQ-{number}-{name}-{index}-{suffix}.{ext}"
INSTANCE_ARTIFACT_TEMPLATE = "{instance}-DQ-{number}-{name}-{index}-{suffix}.{ext}"

DATABASE_CSV_TEMPLATE = "{instance}-{database}-DQ-{number}-{name}-{suffix}.csv"
INSTANCE_CSV_TEMPLATE = "{instance}-DQ-{number}-{name}-{suffix}.csv"

DATABASE_EXCEL_TEMPLATE = "{instance}-{database}-DQ-{suffix}.xlsx"
INSTANCE_EXCEL_TEMPLATE = "{instance}-DQ-{suffix}.xlsx"


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def _placeholders(row: DiagnosticResultRow, suffix: str) -> dict:
    return {
        "instance": row.instance_token,
        "database": row.database_token,
        "number": row.number,
        "name": sanitize_filename(row.name),
        "suffix": suffix,
    }


def artifact_path(
    output_dir: Union[str, Path],
    row: DiagnosticResultRow,
    kind: ArtifactKind,
    index: int,
    suffix: str
) -> Path:
    """Path of the `index`-th (1-based) plan or query-text file of a row."""
    template = (
        DATABASE_ARTIFACT_TEMPLATE if row.database_specific
        else INSTANCE_ARTIFACT_TEMPLATE
    )
    filename = template.format(index=index, ext=kind.extension, **_placeholders(row, suffix))
    return Path(output_dir) / filename


def tabular_path(
    output_dir: Union[str, Path],
    row: DiagnosticResultRow,
    fmt: ExportFormat,
    suffix: str
) -> Path:
    """Path of the CSV file or Excel workbook a row's residual goes to."""
    if fmt is ExportFormat.EXCEL:
        template = (
            DATABASE_EXCEL_TEMPLATE if row.database_specific
            else INSTANCE_EXCEL_TEMPLATE
        )
    else:
        template = (
            DATABASE_CSV_TEMPLATE if row.database_specific
            else INSTANCE_CSV_TEMPLATE
        )
    return Path(output_dir) / template.format(**_placeholders(row, suffix))
