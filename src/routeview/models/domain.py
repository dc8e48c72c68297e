"""Domain models for stops and optimization results."""

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class Stop:
    """A customer location that the optimizer puts in sequence."""

    stop_id: int
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class GeometryRange:
    """Inclusive index range into the route geometry for one stop."""

    start_index: int
    end_index: int


@dataclass(slots=True)
class RouteResult:
    """Outcome of one optimization request.

    ``route_geometry`` points are (longitude, latitude) pairs, as delivered by
    the backend.
    """

    ordered_stop_ids: list[int]
    total_distance: str
    status: str
    route_geometry: Optional[list[tuple[float, float]]] = None
    geometry_mapping: Optional[dict[int, GeometryRange]] = None
