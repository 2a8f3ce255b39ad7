"""Domain model for changelog-query.

Re-exports all public types for convenient access:
    from changelog_query.domain import Record, RecordField
"""
from changelog_query.domain.fields import (
    RecordField,
    SORTABLE_FIELDS,
    TEXT_FILTER_FIELDS,
)
from changelog_query.domain.record import Record
from changelog_query.domain.types import RecordId, Timestamp

__all__ = [
    "Record",
    "RecordField",
    "SORTABLE_FIELDS",
    "TEXT_FILTER_FIELDS",
    "RecordId",
    "Timestamp",
]
