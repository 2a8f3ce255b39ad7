"""changelog-query: in-memory filter/sort engine for change-log snapshots."""
from changelog_query.domain import Record, RecordField
from changelog_query.index import ParseError, TimestampIndex
from changelog_query.query import (
    EvaluationSlot,
    PatternError,
    QueryPipeline,
    QueryResult,
    QueryState,
    QueryStatus,
    SortDirection,
)

__all__ = [
    "EvaluationSlot",
    "ParseError",
    "PatternError",
    "QueryPipeline",
    "QueryResult",
    "QueryState",
    "QueryStatus",
    "Record",
    "RecordField",
    "SortDirection",
    "TimestampIndex",
]
