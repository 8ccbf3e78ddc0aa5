"""Helpers shared by the artwork route handlers."""

from __future__ import annotations

from collections.abc import MutableMapping

from artic_core.logger import get_logger
from artic_core.table_session import TableSession, session_registry

logger = get_logger(__name__)

SESSION_KEY = "artic_table_sid"


def table_for(session: MutableMapping | None) -> TableSession:
    """Return the TableSession bound to this browser session, creating it on first use."""
    if session is None:
        session = {}
    key = session.get(SESSION_KEY)
    if not key:
        key = session_registry.new_key()
        session[SESSION_KEY] = key
    return session_registry.get(key)


def parse_selection_count(raw: object) -> int:
    """Validate the custom-selection input.

    Raises:
        ValueError: with a user-facing message if the value is not a positive integer.
    """
    text = str(raw if raw is not None else "").strip()
    if not text:
        raise ValueError("Please enter a valid positive number")
    try:
        count = int(text, 10)
    except ValueError:
        raise ValueError("Please enter a valid positive number") from None
    if count <= 0:
        raise ValueError("Please enter a valid positive number")
    return count


def parse_page_number(raw: object, default: int = 1) -> int:
    try:
        return max(1, int(str(raw).strip()))
    except (TypeError, ValueError):
        logger.debug("Invalid page number %r, using %d", raw, default)
        return default
