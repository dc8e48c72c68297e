"""Serializers for optimized routes: API view models, result table, CSV."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ...schemas.routing import RouteViewModel, StopViewModel, TableRowModel
from ..geospatial import haversine_km
from ..viewport import RouteView, ViewportController


def route_view_to_model(view: RouteView, controller: ViewportController) -> RouteViewModel:
    stops = []
    for stop_id in view.visible_stop_ids:
        stop = controller.stop_lookup.get(stop_id)
        if stop is None:
            continue
        stops.append(
            StopViewModel(
                ordinal=view.ordinal_of(stop_id),
                myId=stop_id,
                latitude=stop.latitude,
                longitude=stop.longitude,
            )
        )
    (min_lat, min_lon), (max_lat, max_lon) = view.bounding_box
    return RouteViewModel(
        stops=stops,
        polyline=[[lat, lon] for lat, lon in view.polyline] if view.polyline else None,
        bounds=[[min_lat, min_lon], [max_lat, max_lon]],
        pageIndex=view.page_index,
        pageSize=view.page_size,
        pageCount=view.page_count,
        hasNext=view.has_next,
        hasPrevious=view.has_previous,
        showAll=view.show_all,
        totalStops=view.total_stops,
    )


def build_table_rows(controller: ViewportController) -> list[TableRowModel]:
    """Rows for every stop in optimized order, with the straight-line leg from the previous point."""
    rows: list[TableRowModel] = []
    prev_lat, prev_lon = controller.start
    for stop_id in controller.result.ordered_stop_ids:
        stop = controller.stop_lookup.get(stop_id)
        if stop is None:
            continue
        rows.append(
            TableRowModel(
                ordinal=controller.ordinal_of(stop_id),
                myId=stop_id,
                latitude=stop.latitude,
                longitude=stop.longitude,
                distance_from_prev_km=round(haversine_km(prev_lat, prev_lon, stop.latitude, stop.longitude), 3),
            )
        )
        prev_lat, prev_lon = stop.latitude, stop.longitude
    return rows


def table_rows_to_csv(rows: Sequence[TableRowModel]) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "ordinal",
        "myId",
        "latitude",
        "longitude",
        "distance_from_prev_km",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for row in rows:
        writer.writerow(row.model_dump())
    return buffer.getvalue()
