"""Plain-text formatting of query results for terminal output."""
from __future__ import annotations

from typing import Sequence

from changelog_query.domain.fields import RecordField
from changelog_query.domain.record import Record
from changelog_query.index.base import SkippedRecord
from changelog_query.query.pipeline import QueryResult

IDLE_MESSAGE = "No filters set."
EMPTY_MESSAGE = "No records found."

_COLUMNS: tuple[tuple[str, RecordField], ...] = (
    ("ID", RecordField.ID),
    ("Name", RecordField.NAME),
    ("Date", RecordField.DATE),
    ("Title", RecordField.TITLE),
    ("Field", RecordField.FIELD),
    ("Old value", RecordField.OLD_VALUE),
    ("New value", RecordField.NEW_VALUE),
)
_MAX_CELL = 28


def _cell(value: object) -> str:
    text = " ".join(str(value).split())
    if len(text) > _MAX_CELL:
        return text[: _MAX_CELL - 3] + "..."
    return text


def format_table(records: Sequence[Record]) -> str:
    """Fixed-width table, one row per record."""
    rows = [[_cell(sel.value_of(r)) for _, sel in _COLUMNS] for r in records]
    headers = [label for label, _ in _COLUMNS]
    widths = [
        max([len(headers[i])] + [len(row[i]) for row in rows])
        for i in range(len(headers))
    ]
    lines = [
        "  ".join(h.ljust(w) for h, w in zip(headers, widths)).rstrip(),
        "  ".join("-" * w for w in widths),
    ]
    for row in rows:
        lines.append("  ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip())
    return "\n".join(lines)


def format_result(result: QueryResult, page_size: int) -> str:
    """Render a QueryResult: idle message, empty message, or a table page."""
    if result.is_idle:
        return IDLE_MESSAGE
    if result.is_empty:
        return EMPTY_MESSAGE
    page = result.head(page_size)
    return "\n".join([
        format_table(page),
        "",
        f"Showing {len(page):,} of {len(result):,} matching records",
    ])


def format_skipped(skipped: Sequence[SkippedRecord]) -> str:
    """One line per record the index build left out."""
    lines = [f"{len(skipped):,} record(s) not indexed (unparseable date):"]
    for item in skipped:
        lines.append(f"  id={item.record.id} date={item.record.date!r}")
    return "\n".join(lines)
