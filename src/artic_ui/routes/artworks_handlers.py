"""Route handlers for the artwork table page.

Handlers are top-level functions so `setup_artwork_routes` stays a flat list
of registrations. Every action answers with a fresh `#artwork-panel`.
"""

from fasthtml.common import Request
from starlette.responses import Response

from artic_core.logger import get_logger
from artic_ui.common.toasts import build_toast
from artic_ui.components.artworks import artworks_content, render_artwork_panel, render_feedback_message
from artic_ui.components.layout import base_layout
from artic_ui.routes.artworks_helpers import parse_page_number, parse_selection_count, table_for

logger = get_logger(__name__)


def _with_feedback_toast(table, title: str, details: str = "", tone: str = "danger"):
    """Panel with inline feedback + global toast."""
    text = f"{title}: {details}" if details else title
    return [
        render_artwork_panel(table, feedback=render_feedback_message(title, details, tone=tone)),
        build_toast(text, tone=tone),
    ]


def _with_toast(fragment, message: str, tone: str = "info"):
    return [fragment, build_toast(message, tone=tone)]


def _stale_response() -> Response:
    # 204 makes HTMX skip the swap, so a superseded page never reaches the view.
    return Response(status_code=204)


def artworks_page(request: Request, session):
    """Render the artwork table page (panel only for HTMX requests)."""
    table = table_for(session)
    table.ensure_loaded()
    content = artworks_content(table)
    if request.headers.get("HX-Request") == "true":
        return content
    return base_layout("Artworks · Art Institute of Chicago", content)


def artworks_table(session, page: str = "1", rows_per_page: str = ""):
    """Navigate to a page (or change the page size) and render the panel."""
    table = table_for(session)
    try:
        target_page = parse_page_number(page)
        requested_size = parse_page_number(rows_per_page, default=table.rows_per_page) if rows_per_page else None

        if requested_size is not None and requested_size != table.rows_per_page:
            applied = table.set_rows_per_page(requested_size)
        elif table.can_go_to(target_page):
            applied = table.go_to_page(target_page)
        else:
            return render_artwork_panel(table)

        if not applied:
            logger.debug("Page %s response superseded by a newer request", target_page)
            return _stale_response()

        panel = render_artwork_panel(table)
        if table.state.error:
            return _with_toast(panel, f"Error loading artworks: {table.state.error}", tone="danger")
        return panel

    except ValueError as exc:
        logger.warning("Invalid pagination request: %s", exc)
        return _with_feedback_toast(table, "Invalid page size", str(exc))
    except Exception:
        logger.exception("Unexpected error while loading page %s", page)
        return _with_feedback_toast(table, "Internal error", "Something went wrong. Please try again.")


def toggle_row(session, artwork_id: int):
    """Flip the selection of one artwork id."""
    table = table_for(session)
    table.toggle_row(artwork_id)
    return render_artwork_panel(table)


def toggle_page(session):
    """Select every row on the current page, or deselect them if all were selected."""
    table = table_for(session)
    table.toggle_page()
    return render_artwork_panel(table)


def custom_selection(session, count: str = ""):
    """Replace the selection with the first `count` rows of the whole result set."""
    table = table_for(session)
    try:
        value = parse_selection_count(count)
    except ValueError as exc:
        return _with_feedback_toast(table, "Invalid selection", str(exc))

    table.apply_custom_selection(value)
    return _with_toast(
        render_artwork_panel(table),
        f"Selected the first {value} row(s)",
        tone="success",
    )


def clear_selection(session):
    """Empty the selection on every page."""
    table = table_for(session)
    table.clear_selection()
    return _with_toast(render_artwork_panel(table), "Selection cleared", tone="info")
