import pytest

from boudoir_console.app.ui.pagination import ELLIPSIS, PaginationState, visible_pages


def test_page_bounds_and_item_range() -> None:
    state = PaginationState(page_size=10, total_items=45)

    assert state.total_pages == 5
    assert state.item_range() == (1, 10)
    assert state.last_page()
    assert state.item_range() == (41, 45)
    assert not state.has_next
    assert state.has_previous


def test_set_page_rejects_out_of_range_and_same_page() -> None:
    state = PaginationState(page_size=10, total_items=30)

    assert not state.set_page(0)
    assert not state.set_page(4)
    assert not state.set_page(1)
    assert state.set_page(3)
    assert state.current_page == 3


def test_mutators_are_ignored_while_loading() -> None:
    state = PaginationState(page_size=10, total_items=30, loading=True)

    assert not state.next_page()
    assert not state.set_page_size(50)
    assert state.current_page == 1
    assert state.page_size == 10


def test_page_size_change_returns_to_first_page() -> None:
    state = PaginationState(page_size=10, total_items=100, current_page=4)

    assert state.set_page_size(25)
    assert state.current_page == 1
    assert state.to_query() == {"page": 1, "limit": 25}


def test_shrinking_total_clamps_current_page() -> None:
    state = PaginationState(page_size=10, total_items=100, current_page=9)

    state.set_total_items(25)

    assert state.current_page == 3
    state.set_total_items(0)
    assert state.current_page == 1
    assert state.item_range() == (0, 0)


def test_invalid_page_size() -> None:
    with pytest.raises(ValueError):
        PaginationState(page_size=0)


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 1, [1]),
        (3, 5, [1, 2, 3, 4, 5]),
        (1, 5, [1, 2, 3, ELLIPSIS, 5]),
        (1, 10, [1, 2, 3, ELLIPSIS, 10]),
        (5, 10, [1, ELLIPSIS, 3, 4, 5, 6, 7, ELLIPSIS, 10]),
        (6, 12, [1, ELLIPSIS, 4, 5, 6, 7, 8, ELLIPSIS, 12]),
        (10, 10, [1, ELLIPSIS, 8, 9, 10]),
    ],
)
def test_visible_pages(current, total, expected) -> None:
    assert visible_pages(current, total) == expected


def test_twenty_seven_rows_in_pages_of_ten() -> None:
    state = PaginationState(page_size=10, total_items=27)
    assert state.total_pages == 3
    assert state.last_page()

    assert not state.set_page(4)
    assert state.current_page == 3
    assert not state.set_page(0)
    assert state.current_page == 3
    assert state.item_range() == (21, 27)
