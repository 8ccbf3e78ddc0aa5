"""Base Layout Component.

HTML shell with Tailwind/HTMX headers, the catalog header, the main content
area and the global toast holder.
"""

import json

from fasthtml.common import H1, Body, Div, Footer, Head, Header, Html, Main, Meta, P, Script, Style, Title

from artic_core import __version__
from artic_ui.common.toasts import TOAST_HOLDER_ID
from artic_ui.config import get_setting
from artic_ui.theme import mix_hex, parse_hex_rgb, readable_ink, resolve_theme


def _tailwind_theme_script(primary: str, accent: str) -> str:
    primary_scale = {
        "50": mix_hex(primary, "#FFFFFF", 0.90),
        "500": primary,
        "600": mix_hex(primary, "#000000", 0.14),
        "700": mix_hex(primary, "#000000", 0.24),
    }
    accent_scale = {
        "50": mix_hex(accent, "#FFFFFF", 0.88),
        "500": accent,
        "600": mix_hex(accent, "#000000", 0.14),
    }
    return (
        "if (typeof tailwind !== 'undefined') {"
        "tailwind.config = {"
        "theme: {extend: {colors: {"
        f"primary: {json.dumps(primary_scale)},"
        f"accent: {json.dumps(accent_scale)}"
        "}}}"
        "};"
        "}"
    )


# Header checkbox tri-state: `indeterminate` is a DOM property, not an attribute.
_INDETERMINATE_SCRIPT = """
    (function () {
        if (window.__articIndeterminateBound) return;
        window.__articIndeterminateBound = true;

        function applyIndeterminate(root) {
            const scope = root && root.querySelectorAll ? root : document;
            scope.querySelectorAll('input[type=checkbox][data-indeterminate]').forEach((box) => {
                box.indeterminate = box.getAttribute('data-indeterminate') === 'true';
            });
        }

        document.addEventListener('DOMContentLoaded', () => applyIndeterminate(document));
        document.body.addEventListener('htmx:afterSwap', (event) => applyIndeterminate(event.target));
    })();
"""

_TOAST_SCRIPT = """
    (function () {
        if (window.__articToastSystemBound) return;
        window.__articToastSystemBound = true;

        function dismissToast(toast) {
            if (!toast || toast.getAttribute('data-toast-closing') === 'true') return;
            toast.setAttribute('data-toast-closing', 'true');
            toast.classList.add('opacity-0');
            window.setTimeout(() => { if (toast.parentNode) toast.remove(); }, 250);
        }

        function initToast(toast) {
            if (!toast || toast.getAttribute('data-toast-ready') === 'true') return;
            toast.setAttribute('data-toast-ready', 'true');
            const parsed = Number.parseInt(toast.getAttribute('data-toast-timeout') || '3000', 10);
            const timeout = Number.isFinite(parsed) ? Math.min(15000, Math.max(1000, parsed)) : 3000;
            window.setTimeout(() => dismissToast(toast), timeout);
        }

        function bindHolder() {
            const holder = document.getElementById('artic-toast-holder');
            if (!holder || holder.dataset.toastBound === 'true') return;
            holder.dataset.toastBound = 'true';
            new MutationObserver(() => {
                holder.querySelectorAll('.artic-toast-entry').forEach(initToast);
            }).observe(holder, { childList: true, subtree: true });
            holder.addEventListener('click', (event) => {
                const closeBtn = event.target.closest('[data-toast-close]');
                if (closeBtn) dismissToast(closeBtn.closest('.artic-toast-entry'));
            });
        }

        document.addEventListener('DOMContentLoaded', bindHolder);
        document.body.addEventListener('htmx:oobAfterSwap', bindHolder);
    })();
"""


def _style_tag():
    return Style("""
        .htmx-indicator { display: none; }
        .htmx-request .htmx-indicator, .htmx-request.htmx-indicator { display: flex; }
        .artic-row-selected { background-color: rgba(var(--app-primary-rgb), 0.10); }
    """)


def base_layout(title: str, content) -> Html:
    """Generate the page shell around `content`."""
    _, primary, accent = resolve_theme(get_setting("ui.theme_preset", ""))

    return Html(
        Head(
            Meta(charset="utf-8"),
            Meta(name="viewport", content="width=device-width, initial-scale=1"),
            Title(title),
            Script(src="https://cdn.tailwindcss.com"),
            Script(_tailwind_theme_script(primary, accent)),
            Script(src="https://unpkg.com/htmx.org@1.9.10"),
            _style_tag(),
        ),
        Body(
            Div(
                Header(
                    Div(
                        H1("Art Institute of Chicago", cls="text-3xl font-bold text-slate-900"),
                        P(
                            "Explore the collection of artworks from the Art Institute of Chicago",
                            cls="text-slate-500 mt-2",
                        ),
                        cls="container mx-auto px-4 py-6",
                    ),
                    cls="border-b border-slate-200 bg-white",
                ),
                Main(content, id="app-main", cls="flex-1 container mx-auto px-4 py-8"),
                Footer(
                    Div(
                        f"Data: Art Institute of Chicago API · v{__version__}",
                        cls="container mx-auto px-4 py-4 text-xs text-slate-400",
                    ),
                    cls="border-t border-slate-200 bg-white",
                ),
                cls="min-h-screen flex flex-col",
            ),
            Div(
                id=TOAST_HOLDER_ID,
                cls="pointer-events-none fixed top-4 right-4 z-50 flex w-[min(420px,95vw)] flex-col gap-2",
            ),
            Script(_TOAST_SCRIPT),
            Script(_INDETERMINATE_SCRIPT),
            style=(
                f"--app-primary: {primary};"
                f"--app-accent: {accent};"
                f"--app-primary-rgb: {', '.join(map(str, parse_hex_rgb(primary)))};"
                f"--app-primary-ink: {readable_ink(primary)};"
            ),
            cls="antialiased bg-slate-50 text-slate-900",
        ),
    )
