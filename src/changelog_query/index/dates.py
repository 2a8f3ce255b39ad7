"""ISO-8601 text -> integer epoch milliseconds.

Index keys are integers so that equality is exact: two records share a
bucket only when their parsed instants are identical to the millisecond.

Interpretation rules:
    "2023-01-01"                 midnight UTC
    "2023-01-01T10:30:00Z"       UTC
    "2023-01-01T10:30:00+03:30"  converted to UTC
    "2023-01-01T10:30:00"        no offset, treated as UTC
    "2023-01-01 10:30:00.250"    space separator, millisecond precision

Anything finer than a millisecond is truncated toward the past.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from changelog_query.domain.types import Timestamp

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


class ParseError(ValueError):
    """Raised when date text cannot be turned into an index key."""

    def __init__(self, text: str, reason: str = "not an ISO-8601 date") -> None:
        super().__init__(f"cannot parse date {text!r}: {reason}")
        self.text = text


def parse_timestamp(text: str) -> Timestamp:
    """Parse ISO-8601 text into Unix epoch milliseconds.

    Raises ParseError for blank or unparseable input.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError(text, "blank")
    if stripped.endswith(("Z", "z")):
        stripped = stripped[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(stripped)
    except ValueError as exc:
        raise ParseError(text, str(exc)) from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // _ONE_MS


def format_timestamp(key: Timestamp) -> str:
    """Render an index key as ISO-8601 UTC text (for CLI and logs)."""
    dt = _EPOCH + key * _ONE_MS
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
