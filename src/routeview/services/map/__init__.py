"""Map rendering."""

from .renderer import build_route_map, render_route_map

__all__ = ["build_route_map", "render_route_map"]
