"""
Excel Exporter
==============

Exports the residual result set of a diagnostic row to a named worksheet
inside an .xlsx workbook.

An existing workbook is opened and only the target sheet is added or
replaced. The header row is bold, frozen and filtered; columns are
auto-sized.

Requires openpyxl. Call probe_excel_backend() before a batch so a missing
backend fails fast.
"""

import logging
import os
import tempfile
import zipfile
from datetime import datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional, Sequence

from .columns import residual_columns
from .errors import BackendUnavailableError, ExcelExportError
from .models import Record, Value
from .sanitizer import MAX_SHEET_NAME_LENGTH, sanitize_sheet_name


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

EXCEL_BACKEND = "openpyxl"

SHEET_CONFLICT_REPLACE = "replace"
SHEET_CONFLICT_RENAME = "rename"
SHEET_CONFLICT_POLICIES = (SHEET_CONFLICT_REPLACE, SHEET_CONFLICT_RENAME)

MAX_COLUMN_WIDTH = 80
SEQUENCE_SEPARATOR = "\n"


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def probe_excel_backend() -> None:
    """
    Check that the Excel backend can be imported.

    Raises:
        BackendUnavailableError: If openpyxl is not installed.
    """
    try:
        import openpyxl  # noqa: F401
    except ImportError as e:
        raise BackendUnavailableError(
            EXCEL_BACKEND,
            f"{e}. Install with: pip install openpyxl"
        ) from e


def export_to_excel(
    records: Sequence[Record],
    file_path: Path,
    sheet_name: str,
    sheet_conflict: str = SHEET_CONFLICT_REPLACE
) -> str:
    """
    Write records to a worksheet of an .xlsx workbook.

    Args:
        records: Residual records (special columns already removed).
        file_path: Target workbook. Created if missing, updated otherwise.
        sheet_name: Worksheet title (made legal for Excel).
        sheet_conflict: "replace" overwrites a sheet with the same title,
                        "rename" adds a numbered sibling instead.

    Returns:
        The title of the worksheet written.

    Raises:
        ExcelExportError: If the workbook cannot be read, filled or saved.
    """
    if sheet_conflict not in SHEET_CONFLICT_POLICIES:
        raise ValueError(f"Unknown sheet conflict policy: {sheet_conflict!r}")

    probe_excel_backend()
    from openpyxl.utils.exceptions import IllegalCharacterError

    file_path = Path(file_path)
    workbook = _open_workbook(file_path)
    title = sanitize_sheet_name(sheet_name)

    existing = _find_sheet(workbook, title)
    if existing is not None and sheet_conflict == SHEET_CONFLICT_REPLACE:
        position = workbook.sheetnames.index(existing)
        workbook.remove(workbook[existing])
        worksheet = workbook.create_sheet(title, position)
    else:
        if existing is not None:
            title = _next_free_title(workbook, title)
        worksheet = workbook.create_sheet(title)

    columns = residual_columns(records)

    try:
        title.encode("utf-8")
        _append_row(worksheet, columns)
        for record in records:
            _append_row(worksheet, [record.get(c) for c in columns])
    except (IllegalCharacterError, ValueError, TypeError) as e:
        raise ExcelExportError(f"sheet '{title}': {e}", file_path) from e

    _format_sheet(worksheet, len(columns))

    _save_replacing(workbook, file_path)

    logger.debug("Wrote %d record(s) to %s [%s]", len(records), file_path, title)
    return title


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _open_workbook(file_path: Path) -> Any:
    """Load an existing workbook or start an empty one."""
    from openpyxl import Workbook, load_workbook
    from openpyxl.utils.exceptions import InvalidFileException

    if not file_path.exists():
        workbook = Workbook()
        workbook.remove(workbook.active)
        return workbook

    try:
        return load_workbook(file_path)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        raise ExcelExportError(f"cannot open existing workbook: {e}", file_path) from e


def _find_sheet(workbook: Any, title: str) -> Optional[str]:
    """Existing sheet title matching `title` (Excel compares case-insensitively)."""
    for name in workbook.sheetnames:
        if name.lower() == title.lower():
            return name
    return None


def _next_free_title(workbook: Any, title: str) -> str:
    counter = 2
    while True:
        tag = f" ({counter})"
        candidate = title[:MAX_SHEET_NAME_LENGTH - len(tag)] + tag
        if _find_sheet(workbook, candidate) is None:
            return candidate
        counter += 1


def _append_row(worksheet: Any, values: Sequence[Value]) -> None:
    """Append one row; text starting with "=" stays text, not a formula."""
    worksheet.append([_cell_value(v) for v in values])
    for cell in worksheet[worksheet.max_row]:
        if isinstance(cell.value, str) and cell.value.startswith("="):
            cell.data_type = "s"


def _save_replacing(workbook: Any, file_path: Path) -> None:
    """Save to a temporary file next to the target, then move it into place."""
    try:
        handle, temp_name = tempfile.mkstemp(
            prefix=f".{file_path.stem}-", suffix=".xlsx", dir=file_path.parent
        )
        os.close(handle)
    except OSError as e:
        raise ExcelExportError(str(e), file_path) from e

    try:
        workbook.save(temp_name)
        os.replace(temp_name, file_path)
    except (OSError, ValueError) as e:
        Path(temp_name).unlink(missing_ok=True)
        raise ExcelExportError(str(e), file_path) from e


def _cell_value(value: Value) -> Any:
    """Convert a value into something openpyxl can store in a cell."""
    if isinstance(value, str):
        # Raises UnicodeEncodeError for lone surrogates, which openpyxl would
        # otherwise save as an unreadable character reference
        value.encode("utf-8")
        return value
    if value is None or isinstance(value, (bool, int, float, Decimal)):
        return value
    if isinstance(value, (datetime, time)):
        # Excel does not support timezones
        return value.replace(tzinfo=None)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return SEQUENCE_SEPARATOR.join("" if v is None else str(_cell_value(v)) for v in value)
    if hasattr(value, "isoformat"):
        return value
    return _cell_value(str(value))


def _format_sheet(worksheet: Any, column_count: int) -> None:
    """Bold + frozen header row, auto filter, auto-sized columns."""
    from openpyxl.styles import Font
    from openpyxl.utils import get_column_letter

    if column_count == 0:
        return

    header_font = Font(bold=True)
    for cell in worksheet[1]:
        cell.font = header_font

    worksheet.freeze_panes = "A2"
    worksheet.auto_filter.ref = worksheet.dimensions

    for column in worksheet.iter_cols(min_col=1, max_col=column_count):
        max_length = 0
        for cell in column:
            if cell.value is not None:
                longest_line = max(len(line) for line in str(cell.value).split("\n"))
                max_length = max(max_length, longest_line)
        letter = get_column_letter(column[0].column)
        worksheet.column_dimensions[letter].width = min(max_length + 2, MAX_COLUMN_WIDTH)
