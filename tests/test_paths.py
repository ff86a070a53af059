"""
Tests for output file naming.
"""

from pathlib import Path

from diagexport.export.models import ArtifactKind, DiagnosticResultRow, ExportFormat
from diagexport.export.paths import artifact_path, tabular_path


def _row(row_factory, **overrides):
    return DiagnosticResultRow.model_validate(row_factory(**overrides))


def test_instance_level_artifact_name(row_factory):
    row = _row(row_factory)
    path = artifact_path("out", row, ArtifactKind.PLAN, 1, "S1")
    assert path == Path("out") / "HOST$INST-DQ-1-Top-Queries-1-S1.sqlplan"


def test_database_level_artifact_name(row_factory):
    row = _row(
        row_factory,
        Name="Index Usage",
        Number=3,
        DatabaseName="master",
        DatabaseSpecific=True,
    )
    path = artifact_path("out", row, ArtifactKind.QUERY_TEXT, 2, "S1")
    assert path.name == "HOST$INST-master-DQ-3-Index-Usage-2-S1.sql"


def test_csv_names(row_factory):
    instance_row = _row(row_factory)
    database_row = _row(row_factory, DatabaseName="db1", DatabaseSpecific=True)

    assert tabular_path("out", instance_row, ExportFormat.CSV, "S1").name == \
        "HOST$INST-DQ-1-Top-Queries-S1.csv"
    assert tabular_path("out", database_row, ExportFormat.CSV, "S1").name == \
        "HOST$INST-db1-DQ-1-Top-Queries-S1.csv"


def test_excel_workbook_shared_per_instance_and_database(row_factory):
    first = _row(row_factory, Name="Top Queries", Number=1)
    second = _row(row_factory, Name="Wait Stats", Number=2)
    database_row = _row(row_factory, DatabaseName="db1", DatabaseSpecific=True)

    assert tabular_path("out", first, ExportFormat.EXCEL, "S1").name == "HOST$INST-DQ-S1.xlsx"
    assert tabular_path("out", first, ExportFormat.EXCEL, "S1") == \
        tabular_path("out", second, ExportFormat.EXCEL, "S1")
    assert tabular_path("out", database_row, ExportFormat.EXCEL, "S1").name == \
        "HOST$INST-db1-DQ-S1.xlsx"


def test_forward_slash_in_instance_is_neutralized(row_factory):
    row = _row(row_factory, SqlInstance="host/inst")
    assert artifact_path("out", row, ArtifactKind.PLAN, 1, "S1").name.startswith("host$inst-DQ-")
