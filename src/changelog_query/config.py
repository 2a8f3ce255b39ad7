"""Viewer defaults: page size and debounce delay."""
from __future__ import annotations

from dataclasses import dataclass

from changelog_query.query.debounce import DEFAULT_DELAY_SECONDS
from changelog_query.query.state import DEFAULT_PAGE_SIZE


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    """How many results to show and how long to wait after typing."""
    page_size: int = DEFAULT_PAGE_SIZE
    debounce_delay: float = DEFAULT_DELAY_SECONDS    # seconds

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.debounce_delay < 0:
            raise ValueError(
                f"debounce_delay must be >= 0, got {self.debounce_delay}"
            )
