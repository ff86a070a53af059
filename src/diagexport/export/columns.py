"""
Column Extractor
================

Separates the special large-object columns ("Query Plan",
"Complete Query Text") from a result set.

The schema is not fixed: a column counts as present if any record
exposes it. Extraction never mutates the input; it returns the residual
records with the column removed.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .models import ArtifactKind, Record, SPECIAL_COLUMNS, Value


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass
class ExtractedColumn:
    """Values pulled out of one special column, in record order."""

    kind: ArtifactKind
    values: list[Value]
    suppressed: bool = False


@dataclass
class ExtractedResult:
    """Residual records plus whatever special columns were found."""

    records: list[Record]
    columns: list[ExtractedColumn] = field(default_factory=list)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def as_sequence(value: Value) -> list[Value]:
    """Reinterpret a column value as an ordered sequence of values."""
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    if isinstance(value, tuple):
        return list(value)
    return [value]


def extract_field(record: Record, column: str) -> tuple[Record, Optional[list[Value]]]:
    """
    Remove `column` from a single record.

    Returns (record, None) unchanged if the column is absent, otherwise a
    copy without the column and its value as a list.
    """
    if not record.has_field(column):
        return record, None
    remaining, value = record.remove_field(column)
    return remaining, as_sequence(value)


def extract_column(
    records: Iterable[Record],
    column: str
) -> tuple[list[Record], Optional[list[Value]]]:
    """
    Remove `column` from every record of a result set.

    Returns the residual records and the concatenated values of all
    records (None elements dropped), or None if no record has the column.
    """
    residual = []
    values: list[Value] = []
    found = False

    for record in records:
        remaining, sequence = extract_field(record, column)
        residual.append(remaining)
        if sequence is None:
            continue
        found = True
        values.extend(v for v in sequence if v is not None)

    return residual, (values if found else None)


def split_special_columns(
    records: Sequence[Record],
    suppress_plan: bool = False,
    suppress_query: bool = False
) -> ExtractedResult:
    """
    Extract "Query Plan" then "Complete Query Text" from a result set.

    The second extraction runs on the residual of the first. Suppressed
    columns are still removed from the residual.
    """
    suppressed = {
        ArtifactKind.PLAN: suppress_plan,
        ArtifactKind.QUERY_TEXT: suppress_query,
    }

    current = list(records)
    extracted = []

    for kind in SPECIAL_COLUMNS:
        current, values = extract_column(current, kind.column)
        if values is not None:
            extracted.append(ExtractedColumn(kind, values, suppressed[kind]))

    return ExtractedResult(records=current, columns=extracted)


def residual_columns(records: Iterable[Record]) -> list[str]:
    """Union of column names across records, in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)
