"""Route viewport helpers."""

from .bounds import bounds
from .controller import RouteView, ViewportController
from .geometry import drawable_polyline, segment
from .numbering import build_ordinal_index, ordinal_of
from .selector import DEFAULT_PAGE_SIZE, ViewportState, page_count, select_visible

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "RouteView",
    "ViewportController",
    "ViewportState",
    "bounds",
    "build_ordinal_index",
    "drawable_polyline",
    "ordinal_of",
    "page_count",
    "segment",
    "select_visible",
]
