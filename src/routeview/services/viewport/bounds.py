"""Map bounding box for the visible stops."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from shapely.geometry import MultiPoint

from ...models.domain import Stop

# Margin around a lone point so the map still has an area to show.
SINGLE_POINT_MARGIN_DEG = 0.01
# Padding so markers on the edge of the box are not clipped.
EDGE_PADDING_DEG = 0.005

logger = logging.getLogger(__name__)

BoundingBox = tuple[tuple[float, float], tuple[float, float]]


def _visible_points(
    start: tuple[float, float],
    visible_stop_ids: Sequence[int],
    stop_lookup: Mapping[int, Stop],
) -> list[tuple[float, float]]:
    points = [start]
    for stop_id in visible_stop_ids:
        stop = stop_lookup.get(stop_id)
        if stop is None:
            logger.debug(f"Stop {stop_id} not found in lookup, excluded from bounds")
            continue
        points.append((stop.latitude, stop.longitude))
    return points


def bounds(
    start: tuple[float, float],
    visible_stop_ids: Sequence[int],
    stop_lookup: Mapping[int, Stop],
) -> BoundingBox:
    """Return ``((min_lat, min_lon), (max_lat, max_lon))`` around the start and visible stops."""
    points = set(_visible_points(start, visible_stop_ids, stop_lookup))

    if len(points) == 1:
        lat, lon = next(iter(points))
        margin = SINGLE_POINT_MARGIN_DEG
        return (lat - margin, lon - margin), (lat + margin, lon + margin)

    # shapely works in x/y, so feed it (lon, lat).
    min_lon, min_lat, max_lon, max_lat = MultiPoint([(lon, lat) for lat, lon in points]).bounds
    pad = EDGE_PADDING_DEG
    return (min_lat - pad, min_lon - pad), (max_lat + pad, max_lon + pad)
