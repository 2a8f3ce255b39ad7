"""Dataset loader: a JSON array of change-log objects -> list[Record].

    [
      {"id": 1, "name": "Ali", "date": "2023-01-01", "title": "...",
       "field": "price", "old_value": "100", "new_value": "120"},
      ...
    ]
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from changelog_query.domain.record import Record

log = logging.getLogger(__name__)


def parse_records(raw: object) -> list[Record]:
    """Build Records from an already-decoded JSON value."""
    if not isinstance(raw, list):
        raise ValueError(
            f"dataset must be a JSON array, got {type(raw).__name__}"
        )
    records: list[Record] = []
    for position, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValueError(
                f"dataset item {position} must be an object, "
                f"got {type(item).__name__}"
            )
        try:
            records.append(Record.from_dict(item))
        except ValueError as exc:
            raise ValueError(f"dataset item {position}: {exc}") from exc
    return records


def load_records(path: str | Path) -> list[Record]:
    """Read and decode a UTF-8 JSON dataset file."""
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        raw = json.load(fh)
    records = parse_records(raw)
    log.debug("Loaded %d records from %s", len(records), path)
    return records
