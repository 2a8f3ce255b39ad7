"""Abstract base for record indexes keyed by exact timestamp.

TimestampIndex (the tree) and LinearScanIndex (the baseline) both
implement this interface, so tests can run the same workload through
both and compare answers.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, TypeVar

from changelog_query.domain.record import Record
from changelog_query.domain.types import Timestamp
from changelog_query.index.dates import ParseError, parse_timestamp

log = logging.getLogger(__name__)

_IndexT = TypeVar("_IndexT", bound="RecordIndexBase")


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    """A record left out of an index build because its date did not parse."""
    record: Record
    error: ParseError


class RecordIndexBase(ABC):
    """Multimap from exact timestamp key to the records carrying it."""

    def __init__(self) -> None:
        self._skipped: list[SkippedRecord] = []

    @classmethod
    def build(cls: type[_IndexT], records: Iterable[Record]) -> _IndexT:
        """Parse every record's date and insert it under that key.

        A record whose date does not parse is excluded from the index
        and reported in .skipped; the rest of the build continues.
        """
        index = cls()
        for record in records:
            try:
                key = parse_timestamp(record.date)
            except ParseError as exc:
                log.debug("Skipping record %s: %s", record.id, exc)
                index._skipped.append(SkippedRecord(record, exc))
                continue
            index.insert(record, key)
        if index._skipped:
            log.warning(
                "%d record(s) excluded from the index: unparseable date",
                len(index._skipped),
            )
        return index

    @property
    def skipped(self) -> list[SkippedRecord]:
        """Records excluded by build(), in input order."""
        return list(self._skipped)

    @abstractmethod
    def insert(self, record: Record, key: Timestamp) -> None:
        """Add a record under key, after any records already there."""
        ...

    @abstractmethod
    def lookup(self, key: Timestamp) -> list[Record]:
        """Return the records stored under exactly key, in insertion order."""
        ...

    @property
    @abstractmethod
    def record_count(self) -> int:
        """Total number of indexed records."""
        ...

    def __len__(self) -> int:
        return self.record_count
