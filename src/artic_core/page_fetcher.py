"""Page Fetcher: loads one page at a time with last-request-wins semantics.

Every `begin()` issues a new request token. Only the result carrying the most
recent token may update the visible state; anything older is discarded on
arrival. There is no cancellation of the HTTP call itself.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from .artworks_api import ArticClient, ArtworkFetchError
from .logger import get_logger
from .models import Artwork, ArtworkPage

logger = get_logger(__name__)

FetchFn = Callable[..., ArtworkPage]
Listener = Callable[["PageState"], None]


@dataclass(frozen=True)
class PageState:
    """Snapshot of what the table should show right now."""

    page: int = 1
    loading: bool = False
    error: str | None = None
    artworks: tuple[Artwork, ...] | None = None
    total: int = 0
    token: int = 0

    @property
    def ids(self) -> list[int]:
        return [a.id for a in self.artworks or ()]


@dataclass
class PageFetcher:
    """Fetch pages from the data source and publish state changes to listeners."""

    fetch: FetchFn | None = None
    _state: PageState = field(default_factory=PageState)
    _latest_token: int = 0
    _listeners: list[Listener] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self):
        if self.fetch is None:
            self.fetch = ArticClient().fetch_page

    @property
    def state(self) -> PageState:
        return self._state

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def subscribe(self, listener: Listener) -> None:
        """Register a callable invoked with the new PageState after each applied result."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def begin(self, page: int) -> int:
        """Start a request for `page` and return its token."""
        if int(page) < 1:
            raise ValueError(f"Page number must be >= 1, got {page}")
        with self._lock:
            self._latest_token += 1
            token = self._latest_token
            self._state = replace(self._state, page=int(page), loading=True, error=None, token=token)
        logger.debug("Request #%d issued for page %d", token, page)
        return token

    def complete(self, token: int, result: ArtworkPage) -> bool:
        """Apply a successful result if `token` is still the latest. Returns whether it was applied."""
        with self._lock:
            if token != self._latest_token:
                logger.debug(
                    "Discarding stale response #%d for page %d (latest #%d)", token, result.page, self._latest_token
                )
                return False
            self._state = PageState(
                page=result.page,
                loading=False,
                error=None,
                artworks=tuple(result.artworks),
                total=max(0, int(result.total)),
                token=token,
            )
            snapshot = self._state
        self._notify(snapshot)
        return True

    def fail(self, token: int, message: str) -> bool:
        """Record a fetch error (data cleared) if `token` is still the latest."""
        with self._lock:
            if token != self._latest_token:
                logger.debug("Discarding stale failure #%d: %s", token, message)
                return False
            self._state = replace(self._state, loading=False, error=message, artworks=None, token=token)
            snapshot = self._state
        self._notify(snapshot)
        return True

    def load(self, page: int, limit: int | None = None) -> bool:
        """Fetch `page` and apply the outcome. Returns False when the response went stale."""
        return self.run(self.begin(page), page, limit)

    def run(self, token: int, page: int, limit: int | None = None) -> bool:
        """Fetch for an already issued `token` and apply the result or the failure."""
        try:
            result = self.fetch(int(page), limit)
        except ArtworkFetchError as exc:
            logger.warning("Fetching page %d failed: %s", page, exc)
            return self.fail(token, str(exc) or "Failed to fetch artworks")
        except Exception as exc:
            # Anything else still has to clear `loading`.
            logger.exception("Unexpected error while fetching page %d", page)
            return self.fail(token, f"Failed to fetch artworks: {exc}")
        return self.complete(token, result)

    def _notify(self, snapshot: PageState) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Page listener %r failed", listener)
