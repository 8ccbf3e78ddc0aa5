"""Test bootstrap.

Ensures `src/` is importable, keeps logs out of the working tree and resets
the in-memory table sessions between tests.
"""

from __future__ import annotations

import contextlib
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure():
    """Redirect session logging to a temporary folder before test collection."""
    from artic_core import logger as logger_mod
    from artic_core.config_manager import get_config_manager

    session_logs_dir = Path(tempfile.mkdtemp(prefix="artic-pytest-logs-")) / "logs"
    get_config_manager().set_logs_dir(str(session_logs_dir))
    logger_mod.LOG_BASE_DIR = session_logs_dir
    for handler in list(logger_mod.app_logger.handlers):
        logger_mod.app_logger.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()


def make_artwork(artwork_id: int, **fields):
    from artic_core.models import Artwork

    return Artwork(id=artwork_id, title=fields.pop("title", f"Artwork {artwork_id}"), **fields)


def make_page(page: int, ids, total: int = 120):
    from artic_core.models import ArtworkPage

    return ArtworkPage(page=page, artworks=tuple(make_artwork(i) for i in ids), total=total)


class FakeCatalog:
    """In-memory stand-in for the data source: ids are deliberately non-sequential."""

    def __init__(self, total: int = 120, id_offset: int = 1000):
        self.total = total
        self.id_offset = id_offset
        self.calls: list[tuple[int, int | None]] = []
        self.error = None

    def ids_for(self, page: int, limit: int | None):
        size = limit or 12
        start = (page - 1) * size
        stop = min(start + size, self.total)
        return [self.id_offset + 7 * position for position in range(start, max(start, stop))]

    def fetch_page(self, page: int, limit: int | None = None):
        self.calls.append((page, limit))
        if self.error is not None:
            raise self.error
        return make_page(page, self.ids_for(page, limit), total=self.total)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def table_session(fake_catalog):
    """TableSession wired to the fake catalog with 12 rows per page."""
    from artic_core.page_fetcher import PageFetcher
    from artic_core.table_session import TableSession

    return TableSession(PageFetcher(fetch=fake_catalog.fetch_page), rows_per_page=12, rows_per_page_options=[12, 24, 48])


@pytest.fixture(autouse=True)
def _reset_sessions():
    from artic_core.table_session import session_registry

    session_registry.reset()
    yield
    session_registry.reset()
