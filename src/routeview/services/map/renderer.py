"""Interactive map rendering for the current route viewport."""

from __future__ import annotations

import html
import logging

import folium

from ..viewport import RouteView, ViewportController

ROUTE_COLOR = "#3388ff"
ROUTE_WEIGHT = 4
ROUTE_OPACITY = 0.7

logger = logging.getLogger(__name__)


def _page_caption(view: RouteView, strings: dict[str, str]) -> str:
    shown = len(view.visible_stop_ids)
    if view.show_all:
        return f"{strings['show_all']} - {strings['showing']} {shown} {strings['customers']}"
    current = view.page_index + 1 if view.page_count else 0
    return (
        f"{strings['page']} {current} / {view.page_count} - "
        f"{strings['showing']} {shown} {strings['customers']}"
    )


def _coordinate_line(lat: float, lon: float, strings: dict[str, str]) -> str:
    return f"{strings['coordinate']} {lat:.6f}, {lon:.6f}"


def build_route_map(controller: ViewportController, strings: dict[str, str]) -> folium.Map:
    """Build a map of the controller's current view.

    The route line is only added when the view has a drawable polyline.
    """
    view = controller.view()
    (min_lat, min_lon), (max_lat, max_lon) = view.bounding_box

    m = folium.Map(tiles="OpenStreetMap")
    m.fit_bounds([[min_lat, min_lon], [max_lat, max_lon]])

    if view.polyline:
        folium.PolyLine(
            view.polyline,
            color=ROUTE_COLOR,
            weight=ROUTE_WEIGHT,
            opacity=ROUTE_OPACITY,
        ).add_to(m)

    start_lat, start_lon = controller.start
    folium.Marker(
        [start_lat, start_lon],
        popup=folium.Popup(
            f"<strong>{html.escape(strings['starting_point_marker'])}</strong><br/>"
            f"{html.escape(_coordinate_line(start_lat, start_lon, strings))}"
        ),
        icon=folium.Icon(color="green", icon="info-sign"),
    ).add_to(m)

    for stop_id in view.visible_stop_ids:
        stop = controller.stop_lookup.get(stop_id)
        if stop is None:
            continue
        ordinal = view.ordinal_of(stop_id)
        folium.Marker(
            [stop.latitude, stop.longitude],
            popup=folium.Popup(
                f"<strong>{html.escape(strings['customer'])} {ordinal}</strong><br/>"
                f"ID: {stop_id}<br/>"
                f"{html.escape(_coordinate_line(stop.latitude, stop.longitude, strings))}"
            ),
            tooltip=str(ordinal),
        ).add_to(m)

    caption = html.escape(_page_caption(view, strings))
    title = html.escape(strings["optimized_route_map"])
    m.get_root().html.add_child(
        folium.Element(f'<div class="route-map-caption"><h3>{title}</h3><p>{caption}</p></div>')
    )
    logger.debug(f"Rendered map with {len(view.visible_stop_ids)} stops, polyline={'yes' if view.polyline else 'no'}")
    return m


def render_route_map(controller: ViewportController, strings: dict[str, str]) -> str:
    """Return the map as a standalone HTML document."""
    return build_route_map(controller, strings).get_root().render()
