"""Pagination and show-all state for the route map."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

DEFAULT_PAGE_SIZE = 20


@dataclass(slots=True)
class ViewportState:
    """Which slice of the optimized sequence is on screen.

    ``page_index`` is ignored for selection while ``show_all`` is set, and is
    reset to 0 whenever ``show_all`` changes.
    """

    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    show_all: bool = False

    def __post_init__(self) -> None:
        if self.page_size <= 0:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if self.page_index < 0:
            raise ValueError(f"page_index must be >= 0, got {self.page_index}")

    def has_next(self, total: int) -> bool:
        return not self.show_all and self.page_index < page_count(total, self.page_size) - 1

    def has_previous(self) -> bool:
        return not self.show_all and self.page_index > 0

    def next_page(self, total: int) -> None:
        if self.has_next(total):
            self.page_index += 1

    def previous_page(self) -> None:
        if self.has_previous():
            self.page_index -= 1

    def set_show_all(self, enabled: bool) -> None:
        self.show_all = enabled
        self.page_index = 0

    def reset(self) -> None:
        self.show_all = False
        self.page_index = 0


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if total <= 0:
        return 0
    return math.ceil(total / page_size)


def select_visible(ordered_stop_ids: Sequence[int], state: ViewportState) -> list[int]:
    """Return the stop ids shown for ``state``, in optimized order."""
    if state.show_all:
        return list(ordered_stop_ids)
    start = state.page_index * state.page_size
    # Slicing past the end yields an empty page.
    return list(ordered_stop_ids[start : start + state.page_size])
