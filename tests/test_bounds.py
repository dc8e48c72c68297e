import pytest

from routeview.models.domain import Stop
from routeview.services.viewport import ViewportState, bounds, select_visible
from routeview.services.viewport.bounds import EDGE_PADDING_DEG, SINGLE_POINT_MARGIN_DEG

START = (41.0, 29.0)


def _contains(box, lat: float, lon: float) -> bool:
    (min_lat, min_lon), (max_lat, max_lon) = box
    return min_lat <= lat <= max_lat and min_lon <= lon <= max_lon


def test_start_only_gets_fixed_margin():
    (min_lat, min_lon), (max_lat, max_lon) = bounds(START, [], {})

    assert min_lat == pytest.approx(41.0 - SINGLE_POINT_MARGIN_DEG)
    assert max_lat == pytest.approx(41.0 + SINGLE_POINT_MARGIN_DEG)
    assert min_lon == pytest.approx(29.0 - SINGLE_POINT_MARGIN_DEG)
    assert max_lon == pytest.approx(29.0 + SINGLE_POINT_MARGIN_DEG)


def test_unresolvable_stops_fall_back_to_start_box():
    box = bounds(START, [99, 100], {})

    assert box[0] == pytest.approx((41.0 - SINGLE_POINT_MARGIN_DEG, 29.0 - SINGLE_POINT_MARGIN_DEG))


def test_stop_on_top_of_start_counts_as_one_point():
    lookup = {1: Stop(1, 41.0, 29.0)}

    (min_lat, _), (max_lat, _) = bounds(START, [1], lookup)

    assert max_lat - min_lat == pytest.approx(2 * SINGLE_POINT_MARGIN_DEG)


def test_tight_box_is_padded():
    lookup = {1: Stop(1, 41.2, 28.9), 2: Stop(2, 40.9, 29.3)}

    (min_lat, min_lon), (max_lat, max_lon) = bounds(START, [1, 2], lookup)

    assert min_lat == pytest.approx(40.9 - EDGE_PADDING_DEG)
    assert max_lat == pytest.approx(41.2 + EDGE_PADDING_DEG)
    assert min_lon == pytest.approx(28.9 - EDGE_PADDING_DEG)
    assert max_lon == pytest.approx(29.3 + EDGE_PADDING_DEG)


def test_only_visible_stops_shape_the_box():
    lookup = {1: Stop(1, 41.01, 29.01), 2: Stop(2, 45.0, 35.0)}

    box = bounds(START, [1], lookup)

    assert not _contains(box, 45.0, 35.0)


def test_every_page_contains_start_and_visible_stops():
    stops = [Stop(i, 40.5 + (i % 9) * 0.07, 28.7 + (i % 13) * 0.05) for i in range(1, 58)]
    lookup = {stop.stop_id: stop for stop in stops}
    ordered = [stop.stop_id for stop in reversed(stops)]
    state = ViewportState(page_size=20)

    for page in range(3):
        state.page_index = page
        visible = select_visible(ordered, state)
        box = bounds(START, visible, lookup)
        assert _contains(box, *START)
        for stop_id in visible:
            assert _contains(box, lookup[stop_id].latitude, lookup[stop_id].longitude)

    state.set_show_all(True)
    box = bounds(START, select_visible(ordered, state), lookup)
    assert all(_contains(box, s.latitude, s.longitude) for s in stops)
