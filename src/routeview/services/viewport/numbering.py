"""Stable stop numbering.

A stop's number is its position in the full optimized order, so it reads the
same on every page and in show-all mode.
"""

from __future__ import annotations

from typing import Sequence


def build_ordinal_index(ordered_stop_ids: Sequence[int]) -> dict[int, int]:
    return {stop_id: position + 1 for position, stop_id in enumerate(ordered_stop_ids)}


def ordinal_of(stop_id: int, ordered_stop_ids: Sequence[int]) -> int:
    """Return the 1-based position of ``stop_id``; raises ``KeyError`` for unknown ids."""
    try:
        return ordered_stop_ids.index(stop_id) + 1
    except ValueError as exc:
        raise KeyError(stop_id) from exc
