"""
CSV Exporter
============

Exports the residual result set of a diagnostic row to a CSV file.
Header row on first write; later writes to the same file append rows
under the existing header.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Optional, Sequence

from .columns import residual_columns
from .errors import CsvExportError
from .models import Record, Value


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Representation of NULL values in CSV
NULL_REPRESENTATION = ""

# Separator used when a cell holds a sequence of values
SEQUENCE_SEPARATOR = "\n"


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def export_to_csv(records: Sequence[Record], file_path: Path) -> Path:
    """
    Write records to a CSV file, appending if it already exists.

    Args:
        records: Residual records (special columns already removed).
        file_path: Target CSV file.

    Returns:
        The target path.

    Raises:
        CsvExportError: If the file cannot be written or the records carry
                        columns the existing header does not have.
    """
    file_path = Path(file_path)
    existing_header = _read_header(file_path)

    if existing_header is None:
        fieldnames = residual_columns(records)
        write_header = True
        mode = "wb"
    else:
        fieldnames = existing_header
        write_header = False
        mode = "ab"
        extra = [c for c in residual_columns(records) if c not in fieldnames]
        if extra:
            raise CsvExportError(
                f"columns {extra} are not in the existing header {fieldnames}",
                file_path
            )

    # Render and encode every row before touching the file, so a bad value
    # leaves an existing file as it was
    buffer = io.StringIO(newline="")
    try:
        writer = csv.DictWriter(buffer, fieldnames=fieldnames, restval=NULL_REPRESENTATION)
        if write_header:
            writer.writeheader()

        for record in records:
            writer.writerow({k: format_cell(v) for k, v in record.items()})

        data = buffer.getvalue().encode("utf-8")
    except (csv.Error, UnicodeError) as e:
        raise CsvExportError(f"malformed value: {e}", file_path) from e

    try:
        with open(file_path, mode) as f:
            f.write(data)
    except OSError as e:
        raise CsvExportError(str(e), file_path) from e

    logger.debug("Wrote %d record(s) to %s", len(records), file_path)
    return file_path


def format_cell(value: Value) -> str:
    """Render one value as CSV cell text."""
    if value is None:
        return NULL_REPRESENTATION
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (list, tuple)):
        return SEQUENCE_SEPARATOR.join(format_cell(v) for v in value)
    return str(value)


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _read_header(file_path: Path) -> Optional[list[str]]:
    """Header of an existing, non-empty CSV file, or None."""
    if not file_path.exists() or file_path.stat().st_size == 0:
        return None

    try:
        with open(file_path, "r", newline="", encoding="utf-8") as f:
            header = next(csv.reader(f), None)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise CsvExportError(f"cannot read existing header: {e}", file_path) from e

    return header or None
