"""Pagination state machine.

Invariant after every mutation: ``total_pages == max(1, ceil(total_items /
page_size))`` and ``1 <= current_page <= total_pages``. Out-of-range input is
clamped or ignored, never raised.

Only ``set_page_size`` and an effective ``go_to_page`` signal ``on_change``;
``set_total_items`` and ``reset_to_first`` are called from inside a recompute
pass and stay silent.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from paginated_table.config.settings import DEFAULT_PAGE_SIZE, JUMP_PAGES
from paginated_table.models import PaginationState

_logger = logging.getLogger(__name__)

__all__ = [
    "PaginationService",
    "PageNavigation",
    "calculate_total_pages",
    "page_indices",
    "parse_page_size",
]

T = TypeVar("T")


def clamp(value: int, low: int, high: int) -> int:
    return min(max(value, low), high)


def calculate_total_pages(total_items: int, page_size: int) -> int:
    if page_size <= 0:
        return 1
    return max(1, math.ceil(total_items / page_size))


def page_indices(page: int, page_size: int, total_items: int) -> tuple[int, int]:
    start = (page - 1) * page_size
    end = min(start + page_size, total_items)
    return start, end


def parse_page_size(raw: Any) -> Optional[int]:
    """Parse a user supplied page size; ``None`` when not a positive integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, str):
        try:
            size = int(raw.strip(), 10)
        except ValueError:
            return None
        return size if size > 0 else None
    return None


@dataclass(frozen=True)
class PageNavigation:
    can_go_prev: bool
    can_go_next: bool
    can_jump_back: bool
    can_jump_forward: bool
    item_start: int  # 1-based, 0 when there are no items
    item_end: int


class PaginationService:
    def __init__(
        self, on_change: Callable[[], None] | None = None, page_size: int = DEFAULT_PAGE_SIZE
    ):
        self._on_change = on_change or (lambda: None)
        size = page_size if page_size > 0 else DEFAULT_PAGE_SIZE
        self._state = PaginationState(page_size=size)

    def state(self) -> PaginationState:
        return replace(self._state)

    @property
    def current_page(self) -> int:
        return self._state.current_page

    @property
    def page_size(self) -> int:
        return self._state.page_size

    @property
    def total_pages(self) -> int:
        return self._state.total_pages

    # Mutations -------------------------------------------------------
    def set_page_size(self, size: int) -> None:
        if size <= 0:
            _logger.debug("Ignoring non-positive page size %s", size)
            return
        s = self._state
        s.page_size = size
        s.total_pages = calculate_total_pages(s.total_items, size)
        s.current_page = clamp(s.current_page, 1, s.total_pages)
        self._on_change()

    def set_total_items(self, total: int) -> None:
        s = self._state
        s.total_items = max(0, total)
        s.total_pages = calculate_total_pages(s.total_items, s.page_size)
        s.current_page = clamp(s.current_page, 1, s.total_pages)

    def go_to_page(self, page: int) -> None:
        target = clamp(page, 1, self._state.total_pages)
        if target != self._state.current_page:
            self._state.current_page = target
            self._on_change()

    def reset_to_first(self) -> None:
        self._state.current_page = 1

    def next_page(self) -> None:
        self.go_to_page(self._state.current_page + 1)

    def previous_page(self) -> None:
        self.go_to_page(self._state.current_page - 1)

    def jump(self, delta: int) -> None:
        self.go_to_page(self._state.current_page + delta)

    def go_to_last(self) -> None:
        self.go_to_page(self._state.total_pages)

    # Queries ---------------------------------------------------------
    def get_page(self, records: Sequence[T]) -> List[T]:
        start, end = page_indices(self._state.current_page, self._state.page_size, len(records))
        return list(records[start:end])

    def navigation(self) -> PageNavigation:
        s = self._state
        start = (s.current_page - 1) * s.page_size + 1 if s.total_items > 0 else 0
        end = min(s.current_page * s.page_size, s.total_items)
        return PageNavigation(
            can_go_prev=s.current_page > 1,
            can_go_next=s.current_page < s.total_pages,
            can_jump_back=s.current_page > JUMP_PAGES,
            can_jump_forward=s.current_page + JUMP_PAGES <= s.total_pages,
            item_start=start,
            item_end=end,
        )

    def summary_text(self) -> str:
        return f"Page {self._state.current_page} of {self._state.total_pages}"

    def item_range_text(self) -> str:
        nav = self.navigation()
        return f"Showing {nav.item_start}-{nav.item_end} of {self._state.total_items}"
