import threading

import pytest

from artic_core.artworks_api import ArtworkFetchError
from artic_core.page_fetcher import PageFetcher
from artic_core.table_session import (
    HEADER_CHECKED,
    HEADER_INDETERMINATE,
    HEADER_UNCHECKED,
    SessionRegistry,
    TableSession,
)


def test_ensure_loaded_fetches_first_page_once(table_session, fake_catalog):
    table_session.ensure_loaded()
    table_session.ensure_loaded()
    assert fake_catalog.calls == [(1, 12)]
    assert table_session.total_pages == 10


def test_selection_persists_across_navigation(table_session):
    """Rows selected on page 1 stay selected after visiting page 2 and coming back."""
    table_session.ensure_loaded()
    page_one = table_session.page_ids
    table_session.toggle_row(page_one[2])
    table_session.toggle_row(page_one[6])
    assert table_session.selection.get_selected_count() == 2

    table_session.go_to_page(2)
    assert table_session.current_page == 2
    assert not any(table_session.selection.is_selected(i) for i in table_session.page_ids)
    assert table_session.header_state() == HEADER_UNCHECKED

    table_session.go_to_page(1)
    assert table_session.selection.is_selected(page_one[2])
    assert table_session.selection.is_selected(page_one[6])
    assert table_session.header_state() == HEADER_INDETERMINATE


def test_toggle_page_uses_cached_rows_without_refetch(table_session, fake_catalog):
    table_session.ensure_loaded()
    for artwork_id in table_session.page_ids[:5]:
        table_session.toggle_row(artwork_id)

    table_session.toggle_page()
    assert table_session.header_state() == HEADER_CHECKED
    assert table_session.selection.get_selected_count() == 12

    table_session.toggle_page()
    assert table_session.header_state() == HEADER_UNCHECKED
    assert len(fake_catalog.calls) == 1


def test_out_of_range_navigation_is_ignored(table_session, fake_catalog):
    table_session.ensure_loaded()
    assert table_session.go_to_page(11) is False
    assert table_session.go_to_page(0) is False
    assert table_session.current_page == 1
    assert len(fake_catalog.calls) == 1


def test_set_rows_per_page_resets_to_first_page(table_session, fake_catalog):
    table_session.ensure_loaded()
    table_session.go_to_page(4)

    table_session.set_rows_per_page(24)

    assert table_session.current_page == 1
    assert table_session.rows_per_page == 24
    assert fake_catalog.calls[-1] == (1, 24)
    assert len(table_session.page_ids) == 24
    assert table_session.total_pages == 5


def test_set_rows_per_page_rejects_unknown_sizes(table_session):
    with pytest.raises(ValueError):
        table_session.set_rows_per_page(13)


def test_custom_selection_uses_session_pagination(table_session):
    table_session.ensure_loaded()
    table_session.toggle_row(table_session.page_ids[0])

    table_session.apply_custom_selection(25)

    assert table_session.selection.sorted_ids() == list(range(1, 26))


def test_fetch_error_clears_visible_ids(table_session, fake_catalog):
    table_session.ensure_loaded()
    fake_catalog.error = ArtworkFetchError("HTTP error! status: 500")

    table_session.go_to_page(2)

    assert table_session.state.error == "HTTP error! status: 500"
    assert table_session.page_ids == []
    assert table_session.header_state() == HEADER_UNCHECKED


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        (1, [1, 2, 3, 4, 5]),
        (3, [1, 2, 3, 4, 5]),
        (4, [2, 3, 4, 5, 6]),
        (9, [6, 7, 8, 9, 10]),
        (10, [6, 7, 8, 9, 10]),
    ],
)
def test_visible_page_numbers_window(table_session, current, expected):
    table_session.ensure_loaded()
    table_session.current_page = current
    assert table_session.visible_page_numbers() == expected


def test_visible_page_numbers_small_dataset(fake_catalog):
    fake_catalog.total = 30
    table = TableSession(PageFetcher(fetch=fake_catalog.fetch_page), rows_per_page=12, rows_per_page_options=[12])
    table.ensure_loaded()
    assert table.visible_page_numbers() == [1, 2, 3]


def test_session_registry_returns_same_table_per_key(table_session):
    registry = SessionRegistry(factory=lambda: table_session)
    assert registry.get("abc") is registry.get("abc")
    assert len(registry) == 1

    registry.discard("abc")
    assert len(registry) == 0


def test_session_registry_evicts_least_recently_used(table_session):
    registry = SessionRegistry(factory=lambda: TableSession(table_session.fetcher), max_sessions=2)
    first = registry.get("a")
    registry.get("b")
    registry.get("a")
    registry.get("c")

    assert len(registry) == 2
    assert "a" in registry
    assert "b" not in registry
    assert registry.get("a") is first


def test_session_registry_limit_comes_from_config():
    assert SessionRegistry().max_sessions == 500


def test_concurrent_navigation_keeps_page_and_rows_consistent(fake_catalog):
    """Page 2 still in flight while page 3 loads: the table must end up on page 3."""
    page_two_started = threading.Event()
    release_page_two = threading.Event()

    def slow_fetch(page, limit=None):
        if page == 2:
            page_two_started.set()
            release_page_two.wait(timeout=5)
        return fake_catalog.fetch_page(page, limit)

    table = TableSession(PageFetcher(fetch=slow_fetch), rows_per_page=12, rows_per_page_options=[12])
    table.ensure_loaded()

    outcome = {}
    worker = threading.Thread(target=lambda: outcome.setdefault("page_two", table.go_to_page(2)))
    worker.start()
    assert page_two_started.wait(timeout=5)

    assert table.go_to_page(3) is True
    release_page_two.set()
    worker.join(timeout=5)

    assert outcome["page_two"] is False
    assert table.current_page == 3
    assert table.state.page == 3
    assert table.page_ids == fake_catalog.ids_for(3, 12)


def test_toggle_page_follows_latest_applied_page(table_session, fake_catalog):
    """A listener reacting to page 2 by moving on to page 3 leaves page 3 as the toggled page."""
    moved = []

    def jump_ahead(state):
        if state.page == 2 and not moved:
            moved.append(True)
            table_session.go_to_page(3)

    table_session.ensure_loaded()
    table_session.fetcher.subscribe(jump_ahead)
    table_session.go_to_page(2)
    table_session.toggle_page()

    assert table_session.page_ids == fake_catalog.ids_for(3, 12)
    assert table_session.selection.sorted_ids() == sorted(fake_catalog.ids_for(3, 12))
