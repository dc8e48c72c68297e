import pytest

from routeview.services.viewport import ViewportState, page_count, select_visible


def test_single_page_result():
    ordered = [5, 7, 2]
    state = ViewportState(page_size=20)

    assert page_count(len(ordered), state.page_size) == 1
    assert select_visible(ordered, state) == [5, 7, 2]
    assert state.has_next(len(ordered)) is False
    assert state.has_previous() is False


def test_pages_of_twenty_over_forty_five_stops():
    ordered = list(range(1, 46))
    state = ViewportState(page_size=20)

    assert page_count(len(ordered), 20) == 3

    assert select_visible(ordered, state) == list(range(1, 21))
    assert state.has_next(45) is True

    state.next_page(45)
    assert select_visible(ordered, state) == list(range(21, 41))
    assert state.has_next(45) is True
    assert state.has_previous() is True

    state.next_page(45)
    assert select_visible(ordered, state) == [41, 42, 43, 44, 45]
    assert state.has_next(45) is False


def test_pages_cover_sequence_exactly_once():
    ordered = [(i * 7) % 103 for i in range(103)]
    state = ViewportState(page_size=20)
    collected = []
    for index in range(page_count(len(ordered), state.page_size)):
        state.page_index = index
        collected.extend(select_visible(ordered, state))

    assert collected == ordered


def test_show_all_returns_everything_in_order():
    ordered = list(range(100, 0, -1))
    state = ViewportState(page_size=20, page_index=3)
    state.set_show_all(True)

    assert select_visible(ordered, state) == ordered
    assert state.page_index == 0
    assert state.has_next(len(ordered)) is False
    assert state.has_previous() is False


def test_leaving_show_all_starts_at_first_page():
    state = ViewportState(page_size=20)
    state.next_page(60)
    state.next_page(60)
    assert state.page_index == 2

    state.set_show_all(True)
    state.set_show_all(False)

    assert state.show_all is False
    assert state.page_index == 0


def test_page_transitions_are_no_ops_at_the_edges():
    state = ViewportState(page_size=20)
    state.previous_page()
    assert state.page_index == 0

    state.next_page(40)
    state.next_page(40)
    assert state.page_index == 1


def test_page_moves_ignored_in_show_all_mode():
    state = ViewportState(page_size=20)
    state.set_show_all(True)
    state.next_page(100)
    assert state.page_index == 0


def test_reset_returns_to_first_page():
    state = ViewportState(page_size=10)
    state.next_page(50)
    state.set_show_all(True)
    state.reset()

    assert state.show_all is False
    assert state.page_index == 0


def test_page_past_end_is_empty():
    state = ViewportState(page_size=20, page_index=5)
    assert select_visible([1, 2, 3], state) == []


def test_empty_sequence_has_no_pages():
    state = ViewportState(page_size=20)
    assert page_count(0, 20) == 0
    assert select_visible([], state) == []
    assert state.has_next(0) is False


@pytest.mark.parametrize("page_size", [0, -5])
def test_non_positive_page_size_fails_fast(page_size):
    with pytest.raises(ValueError):
        ViewportState(page_size=page_size)
    with pytest.raises(ValueError):
        page_count(10, page_size)
