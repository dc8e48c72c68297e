"""Route optimization request/response schemas.

Field names follow the optimization backend's JSON format.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class CustomerModel(BaseModel):
    myId: int
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class RouteRequest(BaseModel):
    startLatitude: float = Field(..., ge=-90, le=90)
    startLongitude: float = Field(..., ge=-180, le=180)
    customers: List[CustomerModel] = Field(..., min_length=1)

    @field_validator("customers")
    @classmethod
    def _unique_ids(cls, customers: List[CustomerModel]) -> List[CustomerModel]:
        seen: set[int] = set()
        for customer in customers:
            if customer.myId in seen:
                raise ValueError(f"duplicate myId {customer.myId}")
            seen.add(customer.myId)
        return customers


class GeometryRangeModel(BaseModel):
    startIndex: int = Field(..., ge=0)
    endIndex: int = Field(..., ge=0)

    @model_validator(mode="before")
    @classmethod
    def _accept_pair(cls, value: Any) -> Any:
        """Allow the compact ``[start, end]`` form alongside the object form."""
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("geometry range must have exactly two indices")
            return {"startIndex": value[0], "endIndex": value[1]}
        return value


class RouteResponse(BaseModel):
    optimizedCustomerIds: List[int]
    totalDistance: str
    status: str
    routeGeometry: Optional[List[List[float]]] = Field(
        default=None,
        description="Full road path as [longitude, latitude] points.",
    )
    geometryMapping: Optional[Dict[int, GeometryRangeModel]] = Field(
        default=None,
        description="Per-customer inclusive index range into routeGeometry.",
    )

    @field_validator("totalDistance", "status", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("routeGeometry")
    @classmethod
    def _check_points(cls, points: Optional[List[List[float]]]) -> Optional[List[List[float]]]:
        if points is None:
            return None
        for point in points:
            if len(point) < 2:
                raise ValueError("routeGeometry points must be [longitude, latitude]")
        return points


class StopViewModel(BaseModel):
    ordinal: int
    myId: int
    latitude: float
    longitude: float


class RouteViewModel(BaseModel):
    stops: List[StopViewModel]
    polyline: Optional[List[List[float]]] = Field(
        default=None,
        description="Route line as [latitude, longitude] points; null when there is nothing to draw.",
    )
    bounds: List[List[float]]
    pageIndex: int
    pageSize: int
    pageCount: int
    hasNext: bool
    hasPrevious: bool
    showAll: bool
    totalStops: int


class OptimizationSessionResponse(BaseModel):
    sessionId: str
    result: RouteResponse
    view: RouteViewModel


class TableRowModel(BaseModel):
    ordinal: int
    myId: int
    latitude: float
    longitude: float
    distance_from_prev_km: float


class TableResponse(BaseModel):
    sessionId: str
    totalDistance: str
    status: str
    rows: List[TableRowModel]
