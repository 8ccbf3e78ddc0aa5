"""Rendering helpers for the artwork table page.

The whole interactive area lives in `#artwork-panel`; every HTMX action
(navigation, checkbox clicks, custom selection) swaps that element.
"""

from fasthtml.common import (
    H3,
    H4,
    Button,
    Details,
    Div,
    Form,
    Input,
    Label,
    Option,
    P,
    Select,
    Span,
    Summary,
    Table,
    Tbody,
    Td,
    Th,
    Thead,
    Tr,
)

from artic_core.models import Artwork
from artic_core.selection_calculator import page_range_label
from artic_core.table_session import HEADER_CHECKED, HEADER_INDETERMINATE, TableSession

PANEL_ID = "artwork-panel"
_PANEL_TARGET = f"#{PANEL_ID}"
_COLUMNS = [
    ("Title", "min-w-[250px]"),
    ("Place of Origin", "min-w-[150px]"),
    ("Artist", "min-w-[200px]"),
    ("Inscriptions", "min-w-[200px]"),
    ("Date Start", "min-w-[120px] text-center"),
    ("Date End", "min-w-[120px] text-center"),
]
_COLSPAN = len(_COLUMNS) + 1

_FEEDBACK_STYLES = {
    "success": {"icon": "✅", "card": "bg-emerald-50 border-emerald-300", "title": "text-emerald-800"},
    "info": {"icon": "ℹ️", "card": "bg-sky-50 border-sky-300", "title": "text-sky-800"},
    "danger": {"icon": "⚠️", "card": "bg-rose-50 border-rose-300", "title": "text-rose-800"},
}


def _panel_action_attrs() -> dict:
    return {"hx_target": _PANEL_TARGET, "hx_swap": "outerHTML"}


def _page_url(page: int, rows_per_page: int) -> str:
    return f"/api/artworks/table?page={int(page)}&rows_per_page={int(rows_per_page)}"


def _display_year(value: int | None) -> str:
    return "—" if value is None else str(value)


def render_feedback_message(title: str, details: str = "", tone: str = "info") -> Div:
    """Inline feedback card shown above the table."""
    palette = _FEEDBACK_STYLES.get(tone, _FEEDBACK_STYLES["info"])
    return Div(
        Div(palette["icon"], cls="text-lg leading-none mt-0.5"),
        Div(
            P(title, cls=f"text-sm font-bold {palette['title']}"),
            P(details, cls="text-xs mt-1 text-slate-600") if details else "",
        ),
        cls="flex items-start gap-3 p-3 rounded-lg border shadow-sm " + palette["card"],
        id="artwork-feedback",
    )


def render_fetch_error(message: str) -> Div:
    """Error shown in place of the table when a page could not be fetched."""
    return Div(
        Div(
            P("Error loading artworks", cls="text-rose-600 text-lg font-semibold"),
            P(message or "Failed to fetch artworks", cls="text-slate-500 mt-2"),
            cls="text-center",
        ),
        cls="flex items-center justify-center p-8",
        id="artwork-error",
    )


def render_header_checkbox(header_state: str, *, disabled: bool = False) -> Input:
    """Tri-state "select all on page" checkbox (unchecked / checked / indeterminate)."""
    indeterminate = header_state == HEADER_INDETERMINATE
    return Input(
        type="checkbox",
        id="artwork-select-page",
        checked=header_state == HEADER_CHECKED,
        disabled=disabled,
        aria_label="Select all on page",
        aria_checked="mixed" if indeterminate else str(header_state == HEADER_CHECKED).lower(),
        hx_post="/api/artworks/toggle_page",
        cls="h-4 w-4 cursor-pointer accent-[var(--app-primary)]",
        **{"data-indeterminate": "true" if indeterminate else "false"},
        **_panel_action_attrs(),
    )


def render_artwork_row(artwork: Artwork, selected: bool) -> Tr:
    """One table row; selected rows are highlighted."""
    title = artwork.title or "Untitled"
    return Tr(
        Td(
            Input(
                type="checkbox",
                checked=selected,
                aria_label=f"Select {artwork.title or 'artwork'}",
                hx_post=f"/api/artworks/toggle/{artwork.id}",
                cls="h-4 w-4 cursor-pointer accent-[var(--app-primary)]",
                **_panel_action_attrs(),
            ),
            cls="px-3 py-2",
        ),
        Td(title, cls="px-3 py-2 font-medium"),
        Td(artwork.place_of_origin or "Unknown", cls="px-3 py-2 text-slate-500"),
        Td(artwork.artist_display or "Unknown Artist", cls="px-3 py-2 text-sm"),
        Td(Div(artwork.inscriptions or "None", cls="truncate max-w-xs"), cls="px-3 py-2 text-sm text-slate-500"),
        Td(_display_year(artwork.date_start), cls="px-3 py-2 text-center"),
        Td(_display_year(artwork.date_end), cls="px-3 py-2 text-center"),
        cls="artic-row-selected border-t border-slate-100" if selected else "border-t border-slate-100",
        id=f"artwork-row-{artwork.id}",
        **{"data-selected": "true" if selected else "false"},
    )


def _placeholder_row(content, extra_cls: str = "") -> Tr:
    return Tr(Td(content, colspan=str(_COLSPAN), cls=f"h-64 text-center {extra_cls}".strip()))


def _spinner() -> Div:
    return Div(
        Span(
            cls="inline-block w-8 h-8 rounded-full border-4 border-slate-200 border-t-[var(--app-primary)] animate-spin"
        ),
        cls="flex items-center justify-center",
    )


def render_artwork_table(
    artworks: list[Artwork] | tuple[Artwork, ...] | None,
    selected_ids,
    header_state: str,
    *,
    loading: bool = False,
) -> Div:
    """Table of the current page, with checkboxes reflecting the selection."""
    if loading:
        body_rows = [_placeholder_row(_spinner())]
    elif artworks:
        body_rows = [render_artwork_row(a, a.id in selected_ids) for a in artworks]
    else:
        body_rows = [_placeholder_row("No artworks found", "text-slate-500")]

    head = Thead(
        Tr(
            Th(render_header_checkbox(header_state, disabled=loading or not artworks), cls="w-12 px-3 py-2"),
            *[Th(label, cls=f"{width} px-3 py-2 text-left text-xs uppercase text-slate-500") for label, width in _COLUMNS],
        ),
        cls="bg-slate-50",
    )
    return Div(
        Table(head, Tbody(*body_rows), cls="w-full text-sm"),
        cls="overflow-x-auto",
        id="artwork-table",
    )


def _pager_button(label: str, page: int, rows_per_page: int, *, disabled: bool, active: bool = False, title: str = ""):
    attrs = {}
    if not disabled:
        attrs = {
            "hx_get": _page_url(page, rows_per_page),
            "hx_sync": f"{_PANEL_TARGET}:replace",
            "hx_indicator": "#artwork-loading",
            "hx_disabled_elt": ".artic-page-control",
            **_panel_action_attrs(),
        }
    tone = "bg-[var(--app-primary)] text-[var(--app-primary-ink)]" if active else "bg-white hover:bg-slate-100"
    return Button(
        label,
        type="button",
        disabled=disabled,
        title=title or label,
        cls=f"artic-page-control h-8 min-w-8 px-2 rounded border border-slate-300 text-sm {tone} disabled:opacity-40",
        **attrs,
    )


def render_pagination(
    *,
    current_page: int,
    total_pages: int,
    total: int,
    rows_per_page: int,
    rows_per_page_options: list[int],
    page_numbers: list[int],
    loading: bool = False,
) -> Div:
    """Rows-per-page selector, "Showing X to Y of T" and first/prev/numbers/next/last."""
    first_row, last_row = page_range_label(current_page, rows_per_page, total)
    at_first = current_page <= 1
    at_last = current_page >= total_pages

    rows_select = Div(
        Span("Rows per page:"),
        Select(
            *[Option(str(size), value=str(size), selected=size == rows_per_page) for size in rows_per_page_options],
            id="artwork-rows-per-page",
            name="rows_per_page",
            disabled=loading,
            hx_get="/api/artworks/table?page=1",
            hx_trigger="change",
            hx_sync=f"{_PANEL_TARGET}:replace",
            hx_indicator="#artwork-loading",
            hx_disabled_elt=".artic-page-control",
            cls="artic-page-control w-20 h-8 rounded border border-slate-300 bg-white",
            **_panel_action_attrs(),
        ),
        cls="flex items-center gap-2 text-sm text-slate-500",
    )

    numbered = [
        _pager_button(str(n), n, rows_per_page, disabled=loading, active=n == current_page, title=f"Page {n}")
        for n in page_numbers
    ]
    buttons = Div(
        _pager_button("«", 1, rows_per_page, disabled=at_first or loading, title="First page"),
        _pager_button("‹", current_page - 1, rows_per_page, disabled=at_first or loading, title="Previous page"),
        Div(*numbered, cls="flex items-center gap-1 mx-2"),
        _pager_button("›", current_page + 1, rows_per_page, disabled=at_last or loading, title="Next page"),
        _pager_button("»", total_pages, rows_per_page, disabled=at_last or loading, title="Last page"),
        cls="flex items-center gap-1",
    )

    return Div(
        rows_select,
        Div(
            Span(f"Showing {first_row} to {last_row} of {total} artworks"),
            cls="flex items-center gap-2 text-sm text-slate-500",
        ),
        buttons,
        cls="flex flex-wrap items-center justify-between gap-3 px-4 py-3 border-t border-slate-200 bg-slate-50",
        id="artwork-pagination",
    )


def render_custom_selection_panel() -> Details:
    """Popover-like form: select the first N rows of the whole result set."""
    return Details(
        Summary(
            "☑️ Custom Selection",
            cls="cursor-pointer select-none px-3 py-2 rounded border border-slate-300 bg-white text-sm",
        ),
        Form(
            H4("Select Multiple Rows", cls="font-semibold text-sm"),
            P("Enter the number of rows to select starting from the first row", cls="text-xs text-slate-500"),
            Label("Number of Rows", for_="row-count", cls="block text-sm mt-2"),
            Input(
                type="number",
                id="row-count",
                name="count",
                min="1",
                placeholder="e.g., 25",
                cls="w-full px-3 py-2 border border-slate-300 rounded",
            ),
            Button(
                "Apply Selection",
                type="submit",
                cls="mt-3 w-full px-3 py-2 rounded bg-[var(--app-primary)] text-[var(--app-primary-ink)]",
            ),
            hx_post="/api/artworks/custom_selection",
            cls="absolute z-10 mt-2 w-80 p-4 rounded-lg border border-slate-200 bg-white shadow-lg space-y-1",
            **_panel_action_attrs(),
        ),
        cls="relative",
        id="artwork-custom-selection",
    )


def render_selection_bar(selected_count: int) -> Div:
    return Div(
        render_custom_selection_panel(),
        Div(f"{selected_count} row(s) selected across all pages", cls="text-sm text-slate-500", id="selected-count"),
        Button(
            "Clear selection",
            type="button",
            disabled=selected_count == 0,
            hx_post="/api/artworks/clear_selection",
            cls="text-xs text-slate-500 underline disabled:opacity-40",
            **_panel_action_attrs(),
        ),
        cls="flex items-center gap-4",
    )


def render_artwork_panel(table: TableSession, feedback=None) -> Div:
    """Selection bar + table + pagination for the session's current page."""
    state = table.state
    loading_indicator = Div(_spinner(), id="artwork-loading", cls="htmx-indicator py-2")

    if state.error:
        table_or_error = render_fetch_error(state.error)
    else:
        table_or_error = render_artwork_table(
            state.artworks,
            table.selection.selected_ids,
            table.header_state(),
            loading=state.loading and state.artworks is None,
        )

    main = Div(
        table_or_error,
        render_pagination(
            current_page=table.current_page,
            total_pages=table.total_pages,
            total=state.total,
            rows_per_page=table.rows_per_page,
            rows_per_page_options=table.rows_per_page_options,
            page_numbers=table.visible_page_numbers(),
            loading=state.loading,
        ),
        cls="rounded-lg border border-slate-200 bg-white shadow-sm overflow-hidden",
    )

    return Div(
        feedback if feedback is not None else "",
        Div(render_selection_bar(table.selection.get_selected_count()), cls="flex items-center justify-between"),
        loading_indicator,
        main,
        id=PANEL_ID,
        cls="space-y-4",
    )


def artworks_content(table: TableSession) -> Div:
    """Page body: title row plus the interactive panel."""
    return Div(
        Div(H3("Artworks", cls="text-lg font-bold text-slate-800"), cls="mb-4"),
        render_artwork_panel(table),
    )
