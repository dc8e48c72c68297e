"""Viewport controller tying pagination, geometry, bounds and numbering together."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

from ...models.domain import RouteResult, Stop
from .bounds import BoundingBox, bounds
from .geometry import drawable_polyline, segment
from .numbering import build_ordinal_index
from .selector import DEFAULT_PAGE_SIZE, ViewportState, page_count, select_visible


@dataclass(slots=True)
class RouteView:
    """Everything the map and table need to draw the current viewport."""

    visible_stop_ids: list[int]
    polyline: list[tuple[float, float]] | None
    bounding_box: BoundingBox
    ordinals: Mapping[int, int]
    page_index: int
    page_size: int
    page_count: int
    has_next: bool
    has_previous: bool
    show_all: bool
    total_stops: int

    def ordinal_of(self, stop_id: int) -> int:
        return self.ordinals[stop_id]


class ViewportController:
    """Holds the viewport state for one displayed result.

    Every call to :meth:`view` recomputes the derived view from scratch.
    Transitions and views are serialized per controller; each transition
    returns the view derived right after it.
    """

    def __init__(
        self,
        *,
        start: tuple[float, float],
        stops: Sequence[Stop],
        result: RouteResult,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.start = start
        self.result = result
        self.stop_lookup = {stop.stop_id: stop for stop in stops}
        self.state = ViewportState(page_size=page_size)
        self._ordinals = MappingProxyType(build_ordinal_index(result.ordered_stop_ids))
        self._lock = threading.Lock()

    @property
    def total_stops(self) -> int:
        return len(self.result.ordered_stop_ids)

    def next_page(self) -> RouteView:
        with self._lock:
            self.state.next_page(self.total_stops)
            return self._derive()

    def previous_page(self) -> RouteView:
        with self._lock:
            self.state.previous_page()
            return self._derive()

    def set_show_all(self, enabled: bool) -> RouteView:
        with self._lock:
            self.state.set_show_all(enabled)
            return self._derive()

    def reset(self) -> RouteView:
        with self._lock:
            self.state.reset()
            return self._derive()

    def ordinal_of(self, stop_id: int) -> int:
        return self._ordinals[stop_id]

    def view(self) -> RouteView:
        with self._lock:
            return self._derive()

    def _derive(self) -> RouteView:
        state = self.state
        visible = select_visible(self.result.ordered_stop_ids, state)
        points = segment(
            self.start,
            visible,
            self.stop_lookup,
            self.result.route_geometry,
            self.result.geometry_mapping,
            state,
        )
        return RouteView(
            visible_stop_ids=visible,
            polyline=drawable_polyline(points),
            bounding_box=bounds(self.start, visible, self.stop_lookup),
            ordinals=self._ordinals,
            page_index=state.page_index,
            page_size=state.page_size,
            page_count=page_count(self.total_stops, state.page_size),
            has_next=state.has_next(self.total_stops),
            has_previous=state.has_previous(),
            show_all=state.show_all,
            total_stops=self.total_stops,
        )
