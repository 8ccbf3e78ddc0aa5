"""Selection Model: which artwork ids are selected, across every page visited."""

from __future__ import annotations

from collections.abc import Iterable

from .logger import get_logger
from .selection_calculator import calculate_selected_ids

logger = get_logger(__name__)


class SelectionModel:
    """Identifier-keyed selection set that survives page navigation.

    Membership never depends on which page an id renders on. Operations on
    unknown ids are no-ops, never errors, and nothing here fetches data.
    """

    def __init__(self, selected_ids: Iterable[int] = ()):
        self._selected: set[int] = set(selected_ids)

    @property
    def selected_ids(self) -> frozenset[int]:
        return frozenset(self._selected)

    def is_selected(self, artwork_id: int) -> bool:
        return artwork_id in self._selected

    def toggle_selection(self, artwork_id: int) -> None:
        if artwork_id in self._selected:
            self._selected.discard(artwork_id)
        else:
            self._selected.add(artwork_id)

    def toggle_all_on_page(self, page_ids: Iterable[int]) -> None:
        """Deselect every id if all were selected before the call, else select them all."""
        ids = list(page_ids)
        if not ids:
            return
        if all(i in self._selected for i in ids):
            self._selected.difference_update(ids)
        else:
            self._selected.update(ids)

    def are_all_selected_on_page(self, page_ids: Iterable[int]) -> bool:
        ids = list(page_ids)
        return len(ids) > 0 and all(i in self._selected for i in ids)

    def are_some_selected_on_page(self, page_ids: Iterable[int]) -> bool:
        return any(i in self._selected for i in page_ids)

    def get_selected_count(self) -> int:
        return len(self._selected)

    def apply_custom_selection(self, count: int, rows_per_page: int, current_page: int) -> None:
        """Replace the whole selection with the first `count` rows (not a union)."""
        self._selected = calculate_selected_ids(count, rows_per_page, current_page)
        logger.info("Custom selection applied: %d row(s)", len(self._selected))

    def clear_selection(self) -> None:
        self._selected = set()

    def sorted_ids(self) -> list[int]:
        return sorted(self._selected)
