"""Map a "select the first N rows" request onto artwork identifiers.

No page beyond the current one is ever fetched, so the real identifiers of
rows on other pages are unknown here. The calculator therefore uses the row
position as a stand-in for the identifier (position p -> id p + 1).

NOTE: catalog ids are not sequential, so `{1..N}` generally does not match
the artworks that actually occupy the first N rows. Resolving that needs
either fetching pages until N ids are collected or a server-side range
select; `rows_per_page` and `current_page` are kept in the signature for
that page-aware strategy.
"""

from __future__ import annotations


def calculate_position(page: int, index_in_page: int, rows_per_page: int) -> int:
    """Return the 0-based position of a row within the whole, unpaginated result set."""
    return (int(page) - 1) * int(rows_per_page) + int(index_in_page)


def is_position_selected(position: int, total_to_select: int) -> bool:
    """Position-range check: the first `total_to_select` rows are selected."""
    return 0 <= position < total_to_select


def calculate_selected_ids(count: int, rows_per_page: int, current_page: int) -> set[int]:
    """Return the identifiers for the first `count` rows, starting from the first page.

    Always `{1, ..., count}`; `rows_per_page` and `current_page` do not change
    the result (see the module note). Counts beyond the dataset size are not
    clamped. Callers validate `count > 0`; anything else yields an empty set.
    """
    del rows_per_page, current_page  # reserved for a page-aware strategy
    start_position = 0
    return {position + 1 for position in range(start_position, max(0, int(count)))}


def page_range_label(page: int, rows_per_page: int, total: int) -> tuple[int, int]:
    """Return the 1-based (first, last) row numbers shown on `page`."""
    if total <= 0:
        return 0, 0
    first = calculate_position(page, 0, rows_per_page) + 1
    last = min(calculate_position(page, rows_per_page, rows_per_page), total)
    return min(first, total), last
