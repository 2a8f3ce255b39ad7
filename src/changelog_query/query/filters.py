"""Case-insensitive pattern filters over the text fields of a record.

Each filter is a regular expression searched (not fully matched)
anywhere in one field, so a plain word behaves as a substring match:

    {RecordField.NAME: "ali"}          matches "Ali", "Khalil", "ALI REZA"
    {RecordField.TITLE: "^apart"}      matches titles starting "Apart..."
    {RecordField.NAME: "ali", RecordField.FIELD: "price"}
                                       both must hold (AND)

Blank patterns (after strip) impose no constraint. A pattern that is
not a valid regular expression, typically half-typed input such as
"(pri", is dropped for that evaluation rather than failing the query
or returning nothing. That is the fail-open rule.
"""
from __future__ import annotations

import functools
import logging
import re
from typing import Iterable, Mapping

from changelog_query.domain.fields import RecordField
from changelog_query.domain.record import Record

log = logging.getLogger(__name__)

TextFilters = Mapping[RecordField, str | None]


class PatternError(ValueError):
    """Raised when a filter pattern is not a valid regular expression."""

    def __init__(self, pattern: str, error: re.error) -> None:
        super().__init__(f"invalid filter pattern {pattern!r}: {error}")
        self.pattern = pattern


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a stripped, non-blank pattern case-insensitively.

    Raises PatternError if the pattern is not a valid regex.
    """
    try:
        return _compile(pattern)
    except re.error as exc:
        raise PatternError(pattern, exc) from exc


def _normalized(pattern: str | None) -> str:
    return (pattern or "").strip()


class PredicateFilter:
    """Stateless evaluator for text-field pattern filters."""

    @staticmethod
    def any_active(filters: TextFilters) -> bool:
        """True iff some non-date filter has non-blank text.

        Pattern validity is not checked here: an invalid pattern still
        counts as the user having typed something.
        """
        return any(
            _normalized(pattern)
            for field_sel, pattern in filters.items()
            if field_sel is not RecordField.DATE
        )

    @staticmethod
    def compile(filters: TextFilters) -> list[tuple[RecordField, re.Pattern[str]]]:
        """Compile the active filters, dropping blank and invalid ones."""
        compiled: list[tuple[RecordField, re.Pattern[str]]] = []
        for field_sel, pattern in filters.items():
            if field_sel is RecordField.DATE:
                continue
            text = _normalized(pattern)
            if not text:
                continue
            try:
                compiled.append((field_sel, compile_pattern(text)))
            except PatternError as exc:
                log.warning("Ignoring %s filter: %s", field_sel.value, exc)
        return compiled

    @classmethod
    def matches(cls, record: Record, filters: TextFilters) -> bool:
        """True iff record satisfies every active filter."""
        return _matches_compiled(record, cls.compile(filters))

    @classmethod
    def apply(cls, records: Iterable[Record], filters: TextFilters) -> list[Record]:
        """Keep the records matching every active filter, in input order."""
        compiled = cls.compile(filters)
        if not compiled:
            return list(records)
        return [r for r in records if _matches_compiled(r, compiled)]


def _matches_compiled(
    record: Record,
    compiled: list[tuple[RecordField, re.Pattern[str]]],
) -> bool:
    for field_sel, regex in compiled:
        if regex.search(str(field_sel.value_of(record))) is None:
            return False
    return True
