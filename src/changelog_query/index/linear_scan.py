"""Linear-scan index: a plain list of (key, record) pairs.

This is the baseline the tree is checked against. Every lookup scans
the whole list, O(n), but the answer is trivially correct: records
come back in insertion order because the list is in insertion order.
"""
from __future__ import annotations

from changelog_query.domain.record import Record
from changelog_query.domain.types import Timestamp
from changelog_query.index.base import RecordIndexBase


class LinearScanIndex(RecordIndexBase):
    """Same contract as TimestampIndex, no tree."""

    def __init__(self) -> None:
        super().__init__()
        self._pairs: list[tuple[Timestamp, Record]] = []

    @property
    def record_count(self) -> int:
        return len(self._pairs)

    def insert(self, record: Record, key: Timestamp) -> None:
        self._pairs.append((key, record))

    def lookup(self, key: Timestamp) -> list[Record]:
        return [record for k, record in self._pairs if k == key]
