"""QueryState: everything the user chose for one evaluation.

A QueryState is rebuilt on every filter or sort interaction and never
modified during an evaluation. The with_*() helpers return new states
so a pending debounced evaluation keeps the snapshot it was given.

It also round-trips through a flat string mapping (URL query
parameters, saved views):

    name=ali&date=2023-01-01&sort_key=title&sort_type=asc
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Mapping

from changelog_query.domain.fields import SORTABLE_FIELDS, RecordField
from changelog_query.domain.types import Timestamp
from changelog_query.index.dates import format_timestamp
from changelog_query.query.filters import TextFilters
from changelog_query.query.ordering import SortDirection

DEFAULT_PAGE_SIZE = 40

# Query parameter names.
PARAM_NAME = "name"
PARAM_TITLE = "title"
PARAM_DATE = "date"
PARAM_FIELD = "field"
PARAM_SORT_KEY = "sort_key"
PARAM_SORT_TYPE = "sort_type"


@dataclass(frozen=True, slots=True)
class QueryState:
    """Filter, sort and page parameters for one evaluation.

    date_filter is either a parsed key (epoch milliseconds) or the raw
    text the user typed; the pipeline parses text itself so a bad date
    can yield "no records" instead of an exception.
    """
    name_filter: str | None = None
    title_filter: str | None = None
    field_filter: str | None = None
    date_filter: Timestamp | str | None = None
    sort_field: RecordField | None = None
    sort_direction: SortDirection | None = None
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")

    def text_filters(self) -> TextFilters:
        """The non-date filters keyed by the field they constrain."""
        return {
            RecordField.NAME: self.name_filter,
            RecordField.TITLE: self.title_filter,
            RecordField.FIELD: self.field_filter,
        }

    @property
    def has_date_filter(self) -> bool:
        if self.date_filter is None:
            return False
        if isinstance(self.date_filter, str):
            return bool(self.date_filter.strip())
        return True

    def with_filters(self, **changes: Timestamp | str | None) -> QueryState:
        """Copy with some of the four filters replaced."""
        allowed = {"name_filter", "title_filter", "field_filter", "date_filter"}
        unknown = set(changes) - allowed
        if unknown:
            raise TypeError(f"not a filter: {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    def with_sort_toggled(self, field_sel: RecordField) -> QueryState:
        """Apply a column-header click.

        No direction yet: start DESCENDING.
        Same column as the current sort: flip the direction.
        Different column: keep the current direction.
        """
        if self.sort_direction is None:
            direction = SortDirection.DESCENDING
        elif self.sort_field is field_sel:
            direction = self.sort_direction.flipped()
        else:
            direction = self.sort_direction
        return dataclasses.replace(
            self, sort_field=field_sel, sort_direction=direction
        )

    def with_page_size(self, page_size: int) -> QueryState:
        """Copy with a new page size; non-positive sizes are ignored."""
        if page_size <= 0:
            return self
        return dataclasses.replace(self, page_size=page_size)

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, str],
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> QueryState:
        """Decode a flat parameter mapping.

        An unknown or missing sort_key clears the sort entirely (the
        sort_type is discarded too). A known sort_key with a missing or
        unknown sort_type sorts DESCENDING.
        """
        sort_field = RecordField.parse(params.get(PARAM_SORT_KEY))
        if sort_field not in SORTABLE_FIELDS:
            sort_field = None

        direction: SortDirection | None = None
        if sort_field is not None:
            direction = (
                SortDirection.parse(params.get(PARAM_SORT_TYPE))
                or SortDirection.DESCENDING
            )

        return cls(
            name_filter=params.get(PARAM_NAME) or "",
            title_filter=params.get(PARAM_TITLE) or "",
            field_filter=params.get(PARAM_FIELD) or "",
            date_filter=params.get(PARAM_DATE) or "",
            sort_field=sort_field,
            sort_direction=direction,
            page_size=page_size,
        )

    def to_params(self) -> dict[str, str]:
        """Encode as a flat mapping, omitting empty values."""
        params: dict[str, str] = {}
        for key, value in (
            (PARAM_NAME, self.name_filter),
            (PARAM_TITLE, self.title_filter),
            (PARAM_FIELD, self.field_filter),
        ):
            if value:
                params[key] = value

        if isinstance(self.date_filter, str):
            if self.date_filter:
                params[PARAM_DATE] = self.date_filter
        elif self.date_filter is not None:
            try:
                params[PARAM_DATE] = format_timestamp(self.date_filter)
            except OverflowError:
                # Outside datetime's range; no record can carry this key.
                params[PARAM_DATE] = str(self.date_filter)

        if self.sort_field is not None:
            params[PARAM_SORT_KEY] = self.sort_field.value
        if self.sort_direction is not None:
            params[PARAM_SORT_TYPE] = self.sort_direction.value
        return params
