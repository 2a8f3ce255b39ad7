"""Record: one immutable change-log row.

Each record says who (name) changed which field of which listing
(title), when (date), and from what (old_value) to what (new_value).
Records are loaded once per session and never mutated; the index
buckets and the query results hold references to the same objects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from changelog_query.domain.types import RecordId


_TEXT_KEYS = ("name", "date", "title", "field", "old_value", "new_value")


@dataclass(frozen=True, slots=True)
class Record:
    """Immutable change-log record. Identity is ``id``."""
    id: RecordId
    name: str
    date: str           # ISO-8601 text, parsed by the index
    title: str
    field: str
    old_value: str
    new_value: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Record:
        """Build a Record from a decoded JSON object.

        Raises ValueError for a missing key or a non-integer id.
        Text values are coerced with str() so numeric old/new values
        in the source data still compare as text.
        """
        if "id" not in data:
            raise ValueError("record is missing required key 'id'")
        raw_id = data["id"]
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"record id must be an integer, got {raw_id!r}")

        values: dict[str, str] = {}
        for key in _TEXT_KEYS:
            if key not in data:
                raise ValueError(
                    f"record {raw_id} is missing required key '{key}'"
                )
            value = data[key]
            values[key] = "" if value is None else str(value)
        return cls(id=raw_id, **values)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict in the same shape from_dict() accepts."""
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "title": self.title,
            "field": self.field,
            "old_value": self.old_value,
            "new_value": self.new_value,
        }
