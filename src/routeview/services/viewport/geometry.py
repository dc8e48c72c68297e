"""Route line selection for the visible part of an optimized route.

The line is chosen with a fixed precedence:

1. No road geometry from the backend: a straight-line path from the start
   through every visible stop.
2. Geometry without a per-stop mapping, or show-all mode: the whole geometry.
   While paginated this still draws the full path; that is accepted.
3. Geometry with a mapping while paginated: only the index window covered by
   the visible stops. The first page always starts at index 0 so the line
   leaves from the real start point.

Backend geometry is (lon, lat); everything returned here is (lat, lon).
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ...models.domain import GeometryRange, Stop
from .selector import ViewportState

logger = logging.getLogger(__name__)

MIN_POLYLINE_POINTS = 2


def _straight_line(
    start: tuple[float, float],
    visible_stop_ids: Sequence[int],
    stop_lookup: Mapping[int, Stop],
) -> list[tuple[float, float]]:
    points = [start]
    for stop_id in visible_stop_ids:
        stop = stop_lookup.get(stop_id)
        if stop is None:
            logger.debug(f"Stop {stop_id} not found in lookup, skipping")
            continue
        points.append((stop.latitude, stop.longitude))
    return points


def _to_lat_lon(points: Sequence[Sequence[float]]) -> list[tuple[float, float]]:
    return [(point[1], point[0]) for point in points]


def _index_window(
    visible_stop_ids: Sequence[int],
    geometry_mapping: Mapping[int, GeometryRange],
) -> tuple[int, int] | None:
    ranges = [geometry_mapping[stop_id] for stop_id in visible_stop_ids if stop_id in geometry_mapping]
    if not ranges:
        return None
    return min(r.start_index for r in ranges), max(r.end_index for r in ranges)


def segment(
    start: tuple[float, float],
    visible_stop_ids: Sequence[int],
    stop_lookup: Mapping[int, Stop],
    route_geometry: Optional[Sequence[Sequence[float]]],
    geometry_mapping: Optional[Mapping[int, GeometryRange]],
    state: ViewportState,
) -> list[tuple[float, float]]:
    """Return the points to draw for the visible stops, in (lat, lon) order."""
    if not route_geometry:
        return _straight_line(start, visible_stop_ids, stop_lookup)

    if state.show_all or geometry_mapping is None:
        return _to_lat_lon(route_geometry)

    window = _index_window(visible_stop_ids, geometry_mapping)
    if window is None:
        logger.debug(f"No geometry mapping for any of {len(visible_stop_ids)} visible stops")
        return []

    min_index, max_index = window
    if state.page_index == 0:
        min_index = 0
    min_index = max(min_index, 0)
    max_index = min(max_index, len(route_geometry) - 1)
    if min_index > max_index:
        return []
    return _to_lat_lon(route_geometry[min_index : max_index + 1])


def drawable_polyline(points: Sequence[tuple[float, float]]) -> list[tuple[float, float]] | None:
    """Return ``points`` if they form a line, otherwise ``None``."""
    if len(points) < MIN_POLYLINE_POINTS:
        return None
    return list(points)
