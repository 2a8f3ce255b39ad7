"""Field selectors for filtering and sorting.

Each member's value is the wire name used in JSON data and query
parameters. Member -> accessor resolution goes through an explicit
table so callers never reach into a Record by runtime string key.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable

from changelog_query.domain.record import Record


class RecordField(Enum):
    ID = "id"
    NAME = "name"
    DATE = "date"
    TITLE = "title"
    FIELD = "field"
    OLD_VALUE = "old_value"
    NEW_VALUE = "new_value"

    @classmethod
    def parse(cls, name: str | None) -> RecordField | None:
        """Map a wire name ("old_value", ...) to a member, or None."""
        if name is None:
            return None
        try:
            return cls(name.strip())
        except ValueError:
            return None

    def value_of(self, record: Record) -> int | str:
        """Return this field's value on the given record."""
        return _ACCESSORS[self](record)

    @property
    def is_text(self) -> bool:
        return self is not RecordField.ID


_ACCESSORS: dict[RecordField, Callable[[Record], int | str]] = {
    RecordField.ID: lambda r: r.id,
    RecordField.NAME: lambda r: r.name,
    RecordField.DATE: lambda r: r.date,
    RecordField.TITLE: lambda r: r.title,
    RecordField.FIELD: lambda r: r.field,
    RecordField.OLD_VALUE: lambda r: r.old_value,
    RecordField.NEW_VALUE: lambda r: r.new_value,
}

# Fields that accept a free-text pattern filter. Date is filtered by
# exact index lookup, not by pattern.
TEXT_FILTER_FIELDS: tuple[RecordField, ...] = (
    RecordField.NAME,
    RecordField.TITLE,
    RecordField.FIELD,
)

# Fields exposed as sortable table columns.
SORTABLE_FIELDS: tuple[RecordField, ...] = (
    RecordField.NAME,
    RecordField.DATE,
    RecordField.TITLE,
    RecordField.FIELD,
    RecordField.OLD_VALUE,
    RecordField.NEW_VALUE,
)
