"""
Tabular Export
==============

Dispatches a row's residual records to the CSV or Excel exporter,
choosing the target path from the row's context.
"""

from pathlib import Path
from typing import Sequence, Union

from .csv_exporter import export_to_csv
from .excel_exporter import SHEET_CONFLICT_REPLACE, export_to_excel
from .models import DiagnosticResultRow, ExportFormat, Record
from .paths import tabular_path


def export_tabular(
    records: Sequence[Record],
    fmt: ExportFormat,
    row: DiagnosticResultRow,
    output_dir: Union[str, Path],
    suffix: str,
    sheet_conflict: str = SHEET_CONFLICT_REPLACE
) -> Path:
    """
    Export residual records for one row.

    CSV appends to an existing file; Excel adds or replaces the sheet
    named after the row inside an existing workbook.

    Raises:
        ExportError: CsvExportError or ExcelExportError on write failure.
    """
    fmt = ExportFormat(fmt)
    file_path = tabular_path(output_dir, row, fmt, suffix)

    if fmt is ExportFormat.EXCEL:
        export_to_excel(records, file_path, row.name, sheet_conflict)
    else:
        export_to_csv(records, file_path)

    return file_path
