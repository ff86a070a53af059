"""
Export Models
=============

Data model for diagnostic query rows and their tabular payload.

A DiagnosticResultRow is produced upstream and consumed once by the
exporter. Records are immutable; removing a column yields a new Record.
"""

from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import core_schema


# =============================================================================
# CONSTANTS
# =============================================================================

QUERY_PLAN_COLUMN = "Query Plan"
QUERY_TEXT_COLUMN = "Complete Query Text"

# Characters that would be read as directory separators in a file name
_SEPARATORS = ("\\", "/")


# =============================================================================
# VALUE / RECORD
# =============================================================================

Value = Union[None, bool, int, float, Decimal, str, bytes, datetime, date, time, list]


class Record(Mapping):
    """
    Ordered, read-only mapping of column name -> value.

    The column set is discovered at run time, so a Record makes no
    assumptions about which keys exist.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping] = None, **kwargs: Any):
        data = dict(fields or {})
        data.update(kwargs)
        self._fields = data

    def __getitem__(self, key: str) -> Value:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Record({self._fields!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return list(self.items()) == list(other.items())
        return NotImplemented

    __hash__ = None

    def has_field(self, name: str) -> bool:
        """Return True if the record exposes a column called `name`."""
        return name in self._fields

    def remove_field(self, name: str) -> tuple["Record", Optional[Value]]:
        """
        Return a copy without `name`, plus the removed value.

        If the column is absent, returns this record unchanged and None.
        """
        if name not in self._fields:
            return self, None
        remaining = {k: v for k, v in self._fields.items() if k != name}
        return Record(remaining), self._fields[name]

    @property
    def columns(self) -> list[str]:
        return list(self._fields)

    @classmethod
    def _coerce(cls, value: Any) -> "Record":
        if isinstance(value, Record):
            return value
        if isinstance(value, Mapping):
            return cls(value)
        raise ValueError(f"Result records must be mappings, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source: Any, handler: Any) -> Any:
        return core_schema.no_info_plain_validator_function(cls._coerce)


# =============================================================================
# ENUMS
# =============================================================================

class ExportFormat(str, Enum):
    """Tabular output format."""

    EXCEL = "excel"
    CSV = "csv"

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None

    @property
    def extension(self) -> str:
        return "xlsx" if self is ExportFormat.EXCEL else "csv"


class ArtifactKind(str, Enum):
    """Kind of per-element artifact extracted from a special column."""

    PLAN = "plan"
    QUERY_TEXT = "query_text"

    @property
    def column(self) -> str:
        return QUERY_PLAN_COLUMN if self is ArtifactKind.PLAN else QUERY_TEXT_COLUMN

    @property
    def extension(self) -> str:
        return "sqlplan" if self is ArtifactKind.PLAN else "sql"


# Extraction order matters: query text is extracted from the plan residual
SPECIAL_COLUMNS: tuple[ArtifactKind, ...] = (ArtifactKind.PLAN, ArtifactKind.QUERY_TEXT)


# =============================================================================
# DIAGNOSTIC RESULT ROW
# =============================================================================

def neutralize_separators(value: str) -> str:
    """Replace path separators so the value is safe as part of a file name."""
    for sep in _SEPARATORS:
        value = value.replace(sep, "$")
    return value


class DiagnosticResultRow(BaseModel):
    """
    One diagnostic query's output for one server/database context.

    Accepts the upstream PascalCase keys (Name, Number, SqlInstance, ...)
    as well as the snake_case attribute names.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
    )

    name: str = Field(..., min_length=1, alias="Name")
    number: int = Field(..., alias="Number")
    sql_instance: str = Field(..., min_length=1, alias="SqlInstance")
    database_name: Optional[str] = Field(default=None, alias="DatabaseName")
    database_specific: bool = Field(default=False, alias="DatabaseSpecific")
    result: Optional[list[Record]] = Field(default=None, alias="Result")

    @field_validator("result", mode="before")
    @classmethod
    def _coerce_records(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Result must be a list of records, got {type(value).__name__}")
        return [Record._coerce(item) for item in value]

    @model_validator(mode="after")
    def _check_database(self) -> "DiagnosticResultRow":
        if self.database_specific and not self.database_name:
            raise ValueError("DatabaseName is required when DatabaseSpecific is true")
        return self

    @property
    def instance_token(self) -> str:
        return neutralize_separators(self.sql_instance)

    @property
    def database_token(self) -> str:
        return neutralize_separators(self.database_name or "")

    @property
    def has_result(self) -> bool:
        return bool(self.result)
