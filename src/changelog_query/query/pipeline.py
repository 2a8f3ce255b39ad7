"""QueryPipeline: index lookup -> filter -> sort, over one snapshot.

Evaluation order is fixed:

    0. Nothing to filter on          -> IDLE, no records
    1. Date filter present           -> candidates = index.lookup(key)
       otherwise                     -> candidates = whole dataset
    2. Any text filter active        -> PredicateFilter.apply
    3. Non-empty and sort chosen     -> Orderer.sort
    4. EVALUATING with the ordered, unsliced result

IDLE and "EVALUATING with zero records" are different answers: the
first means the user has not asked for anything yet, the second means
they asked and nothing matched. Callers show different messages.

Pagination is the caller's job (QueryResult.head). The pipeline is a
pure function of (dataset, index, state): it never mutates the
dataset, the index, or any bucket, so evaluating the same state twice
gives the same sequence.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Sequence

from changelog_query.domain.record import Record
from changelog_query.domain.types import Timestamp
from changelog_query.index.base import SkippedRecord
from changelog_query.index.dates import ParseError, parse_timestamp
from changelog_query.index.timestamp_index import TimestampIndex
from changelog_query.query.filters import PredicateFilter
from changelog_query.query.ordering import Orderer
from changelog_query.query.state import QueryState

log = logging.getLogger(__name__)


class QueryStatus(Enum):
    IDLE = auto()
    EVALUATING = auto()


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Outcome of one evaluation."""
    status: QueryStatus
    records: tuple[Record, ...] = ()

    @classmethod
    def idle(cls) -> QueryResult:
        return cls(QueryStatus.IDLE, ())

    @property
    def is_idle(self) -> bool:
        return self.status is QueryStatus.IDLE

    @property
    def is_empty(self) -> bool:
        """Filters were active and nothing matched."""
        return self.status is QueryStatus.EVALUATING and not self.records

    def head(self, page_size: int) -> tuple[Record, ...]:
        """First page_size records."""
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        return self.records[:page_size]

    def __len__(self) -> int:
        return len(self.records)


class QueryPipeline:
    """Evaluates QueryStates against a fixed dataset and its index.

    Args:
        records: the full dataset snapshot, in load order.
        index: a prebuilt index over records. Built here when omitted.
    """

    def __init__(
        self,
        records: Sequence[Record],
        index: TimestampIndex | None = None,
    ) -> None:
        self._records: tuple[Record, ...] = tuple(records)
        self._index = index if index is not None else TimestampIndex.build(self._records)
        self._evaluation_count = 0

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def index(self) -> TimestampIndex:
        return self._index

    @property
    def skipped(self) -> list[SkippedRecord]:
        """Records the index build excluded (they still match text filters)."""
        return self._index.skipped

    @property
    def evaluation_count(self) -> int:
        return self._evaluation_count

    def evaluate(self, state: QueryState) -> QueryResult:
        """Run the pipeline for one state."""
        text_filters = state.text_filters()
        text_active = PredicateFilter.any_active(text_filters)

        if not state.has_date_filter and not text_active:
            self._evaluation_count += 1
            return QueryResult.idle()

        if state.has_date_filter:
            candidates = self._date_candidates(state.date_filter)
        else:
            candidates = list(self._records)

        if text_active:
            candidates = PredicateFilter.apply(candidates, text_filters)

        if candidates and state.sort_field is not None and state.sort_direction is not None:
            candidates = Orderer.sort(candidates, state.sort_field, state.sort_direction)

        self._evaluation_count += 1
        log.debug(
            "Evaluated query: %d of %d records", len(candidates), len(self._records)
        )
        return QueryResult(QueryStatus.EVALUATING, tuple(candidates))

    def _date_candidates(self, date_filter: Timestamp | str | None) -> list[Record]:
        if isinstance(date_filter, str):
            try:
                key = parse_timestamp(date_filter)
            except ParseError as exc:
                log.debug("Date filter matches nothing: %s", exc)
                return []
        else:
            key = date_filter
        return self._index.lookup(key)
