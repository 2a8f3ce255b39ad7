"""Query engine: filter, sort and paginate over an indexed snapshot.

QueryPipeline runs the fixed lookup -> filter -> sort sequence for a
QueryState. EvaluationSlot wraps it for debounced, latest-wins use
from an interactive front end.
"""
from changelog_query.query.debounce import EvaluationSlot
from changelog_query.query.filters import PatternError, PredicateFilter, compile_pattern
from changelog_query.query.ordering import Orderer, SortDirection
from changelog_query.query.pipeline import QueryPipeline, QueryResult, QueryStatus
from changelog_query.query.state import QueryState

__all__ = [
    "EvaluationSlot",
    "Orderer",
    "PatternError",
    "PredicateFilter",
    "QueryPipeline",
    "QueryResult",
    "QueryState",
    "QueryStatus",
    "SortDirection",
    "compile_pattern",
]
