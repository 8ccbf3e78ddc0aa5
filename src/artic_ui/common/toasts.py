"""Toast notifications rendered as HTMX out-of-band fragments."""

from __future__ import annotations

from fasthtml.common import Button, Div, Span

from artic_ui.config import get_setting
from artic_ui.theme import mix_hex, resolve_theme, rgba

TOAST_HOLDER_ID = "artic-toast-holder"
_TIMEOUT_BOUNDS_MS = (1000, 15000)

# tone -> (icon, anchor color)
_TONES = {
    "success": ("✅", "#10B981"),
    "info": ("ℹ️", "#0EA5E9"),
    "danger": ("⚠️", "#EF4444"),
}


def _toast_timeout_ms(duration_ms: int | None) -> int:
    """Explicit duration, else `ui.toast_duration`, clamped to the bounds the client script honours."""
    raw = get_setting("ui.toast_duration", 3000) if duration_ms is None else duration_ms
    try:
        value = int(raw)
    except (TypeError, ValueError):
        value = 3000
    low, high = _TIMEOUT_BOUNDS_MS
    return min(high, max(low, value))


def _toast_style(tone: str) -> str:
    accent = resolve_theme(get_setting("ui.theme_preset", "")).accent
    anchor = _TONES[tone][1]
    top = mix_hex(accent, anchor, 0.28 if tone == "info" else 0.48)
    bottom = mix_hex(accent, "#0F172A", 0.62)
    border = mix_hex(anchor, "#FFFFFF", 0.22)
    return "; ".join(
        [
            f"background: linear-gradient(135deg, {rgba(top, 0.95)} 0%, {rgba(bottom, 0.92)} 100%)",
            f"border: 1px solid {rgba(border, 0.55)}",
            "border-radius: 0.8rem",
            "color: #f8fafc",
        ]
    )


def build_toast(message: str, tone: str = "info", duration_ms: int | None = None) -> Div:
    """Toast appended to `#artic-toast-holder` via hx-swap-oob; it dismisses itself after the timeout."""
    tone = tone if tone in _TONES else "info"
    text = (message or "").strip() or "Done."
    card = Div(
        Span(_TONES[tone][0], cls="text-lg leading-none"),
        Div(text, cls="flex-1 text-sm font-semibold"),
        Button(
            "✕",
            type="button",
            aria_label="Dismiss notification",
            cls="ml-2 h-6 w-6 rounded-full hover:bg-white/20",
            **{"data-toast-close": "true"},
        ),
        role="status",
        aria_live="polite",
        style=_toast_style(tone),
        cls="artic-toast-entry pointer-events-auto flex items-start gap-3 px-4 py-3 shadow-lg transition-opacity",
        **{"data-toast-timeout": str(_toast_timeout_ms(duration_ms))},
    )
    return Div(card, hx_swap_oob=f"beforeend:#{TOAST_HOLDER_ID}")
