"""Per-browser-session table state: the composition root for fetcher and selection.

One `TableSession` owns the Page Fetcher, the Selection Model and the two
ephemeral UI controls (current page, rows per page). Handlers look it up in
the process-wide `session_registry` by the browser session key.
"""

from __future__ import annotations

import math
import threading
import uuid
from collections import OrderedDict
from collections.abc import Callable

from .config_manager import get_config_manager
from .logger import get_logger
from .page_fetcher import PageFetcher, PageState
from .selection import SelectionModel

logger = get_logger(__name__)

HEADER_CHECKED = "checked"
HEADER_INDETERMINATE = "indeterminate"
HEADER_UNCHECKED = "unchecked"

DEFAULT_MAX_SESSIONS = 500


class TableSession:
    """Pagination controls + selection for one browser session."""

    def __init__(
        self,
        fetcher: PageFetcher | None = None,
        selection: SelectionModel | None = None,
        *,
        rows_per_page: int | None = None,
        rows_per_page_options: list[int] | None = None,
    ):
        cm = get_config_manager()
        self.fetcher = fetcher or PageFetcher()
        self.selection = selection or SelectionModel()
        self.rows_per_page_options = list(rows_per_page_options or cm.get_rows_per_page_options())
        self.rows_per_page = int(rows_per_page or cm.get_default_rows_per_page())
        if self.rows_per_page not in self.rows_per_page_options:
            self.rows_per_page = self.rows_per_page_options[0]
        self.current_page = 1
        self._lock = threading.RLock()

    # --- page fetching -------------------------------------------------

    @property
    def state(self) -> PageState:
        return self.fetcher.state

    @property
    def has_loaded(self) -> bool:
        return self.fetcher.latest_token > 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.state.total / self.rows_per_page) if self.rows_per_page else 0

    def _navigate(self, page: int, rows_per_page: int | None = None) -> bool:
        # Controls and the request token change together; the fetch itself runs unlocked.
        with self._lock:
            if rows_per_page is not None:
                self.rows_per_page = rows_per_page
            self.current_page = page
            limit = self.rows_per_page
            token = self.fetcher.begin(page)
        return self.fetcher.run(token, page, limit)

    def load_current(self) -> bool:
        """(Re)fetch the current page. Returns False if a newer request superseded it."""
        return self._navigate(self.current_page)

    def ensure_loaded(self) -> None:
        if not self.has_loaded:
            self.load_current()

    def can_go_to(self, page: int) -> bool:
        if page < 1:
            return False
        if page == 1 or not self.has_loaded or self.state.artworks is None:
            return True
        return page <= self.total_pages

    def go_to_page(self, page: int) -> bool:
        """Navigate to `page` and fetch it. Out-of-range pages are ignored."""
        page = int(page)
        if not self.can_go_to(page):
            logger.debug("Ignoring navigation to page %d (total pages %d)", page, self.total_pages)
            return False
        return self._navigate(page)

    def set_rows_per_page(self, value: int) -> bool:
        """Change the page size; always resets to the first page."""
        value = int(value)
        if value not in self.rows_per_page_options:
            raise ValueError(f"Rows per page must be one of {self.rows_per_page_options}, got {value}")
        return self._navigate(1, rows_per_page=value)

    def visible_page_numbers(self, window: int = 5) -> list[int]:
        """Numbered pager buttons: a window of at most `window` pages around the current one."""
        total = self.total_pages
        if total <= 0:
            return []
        if total <= window:
            return list(range(1, total + 1))
        half = window // 2
        if self.current_page <= half + 1:
            start = 1
        elif self.current_page >= total - half:
            start = total - window + 1
        else:
            start = self.current_page - half
        return list(range(start, start + window))

    # --- selection ------------------------------------------------------

    @property
    def page_ids(self) -> list[int]:
        """Ids of the rows currently displayed, read from the fetcher's latest applied state."""
        return self.fetcher.state.ids

    def header_state(self) -> str:
        ids = self.page_ids
        if self.selection.are_all_selected_on_page(ids):
            return HEADER_CHECKED
        if self.selection.are_some_selected_on_page(ids):
            return HEADER_INDETERMINATE
        return HEADER_UNCHECKED

    def toggle_row(self, artwork_id: int) -> None:
        with self._lock:
            self.selection.toggle_selection(int(artwork_id))

    def toggle_page(self) -> None:
        with self._lock:
            self.selection.toggle_all_on_page(self.page_ids)

    def apply_custom_selection(self, count: int) -> None:
        with self._lock:
            self.selection.apply_custom_selection(int(count), self.rows_per_page, self.current_page)

    def clear_selection(self) -> None:
        with self._lock:
            self.selection.clear_selection()


class SessionRegistry:
    """In-memory map of browser session key -> TableSession.

    Holds at most `max_sessions` tables; the least recently used one is
    dropped when a new session would exceed the limit.
    """

    def __init__(self, factory: Callable[[], TableSession] | None = None, max_sessions: int | None = None):
        self._factory = factory or TableSession
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, TableSession] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_sessions(self) -> int:
        if self._max_sessions is None:
            configured = get_config_manager().get_setting("server.max_sessions", DEFAULT_MAX_SESSIONS)
            try:
                self._max_sessions = max(1, int(configured))
            except (TypeError, ValueError):
                self._max_sessions = DEFAULT_MAX_SESSIONS
        return self._max_sessions

    def new_key(self) -> str:
        return uuid.uuid4().hex

    def get(self, key: str) -> TableSession:
        """Return the session for `key`, creating it on first use."""
        with self._lock:
            table = self._sessions.get(key)
            if table is not None:
                self._sessions.move_to_end(key)
                return table
            table = self._factory()
            self._sessions[key] = table
            logger.debug("Created table session %s", key[:8])
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted idle table session %s", evicted[:8])
            return table

    def discard(self, key: str) -> None:
        with self._lock:
            self._sessions.pop(key, None)

    def set_factory(self, factory: Callable[[], TableSession]) -> None:
        with self._lock:
            self._factory = factory

    def reset(self) -> None:
        with self._lock:
            self._sessions.clear()
            self._factory = TableSession

    def __contains__(self, key: str) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)


session_registry = SessionRegistry()
