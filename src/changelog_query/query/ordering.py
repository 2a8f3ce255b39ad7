"""Stable single-field ordering with a separate descending pass.

Ascending order is a stable sort on the field's natural key:
    ID              numeric
    DATE            chronological (parsed), unparseable dates last
    everything else lexicographic text

Descending order is the ascending result reversed. It is NOT a stable
sort with a reversed comparator: equal elements come out in the
reverse of their ascending order, not in their input order.

    input  [1:"b", 2:"a", 3:"a"]
    asc    [2, 3, 1]
    desc   [1, 3, 2]
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable

from changelog_query.domain.fields import RecordField
from changelog_query.domain.record import Record
from changelog_query.index.dates import ParseError, parse_timestamp


class SortDirection(Enum):
    ASCENDING = "asc"
    DESCENDING = "dsc"

    @classmethod
    def parse(cls, value: str | None) -> SortDirection | None:
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    def flipped(self) -> SortDirection:
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


def _date_key(record: Record) -> tuple[int, int, str]:
    # Parseable dates sort before unparseable ones; the latter fall
    # back to raw text so the order is still total and deterministic.
    try:
        return (0, parse_timestamp(record.date), "")
    except ParseError:
        return (1, 0, record.date)


def sort_key_for(field_sel: RecordField) -> Callable[[Record], Any]:
    """Key function giving field_sel's natural ordering."""
    if field_sel is RecordField.DATE:
        return _date_key
    return field_sel.value_of


class Orderer:
    """Stateless sorter over one field and direction."""

    @staticmethod
    def sort(
        records: Iterable[Record],
        field_sel: RecordField | None,
        direction: SortDirection | None,
    ) -> list[Record]:
        """Return a new list ordered by field_sel in direction.

        If either field_sel or direction is None the input order is
        kept unchanged.
        """
        if field_sel is None or direction is None:
            return list(records)
        ordered = sorted(records, key=sort_key_for(field_sel))
        if direction is SortDirection.DESCENDING:
            ordered.reverse()
        return ordered
