"""Color presets for the table UI plus the few hex helpers the layout and toasts need."""

from __future__ import annotations

import re
from typing import NamedTuple

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class Theme(NamedTuple):
    preset: str
    primary: str
    accent: str


DEFAULT_THEME_PRESET = "rosewater"

# preset -> (primary, accent)
THEME_PRESETS: dict[str, tuple[str, str]] = {
    "rosewater": ("#7B8CC7", "#E8A6B6"),
    "gallery-red": ("#B5364B", "#E7C9A9"),
    "ocean-mist": ("#6F9FC7", "#E8B9A2"),
    "sage-sand": ("#86A88D", "#D9BFA0"),
}


def normalize_hex(color: object, fallback: str) -> str:
    """Return `color` as uppercase #RRGGBB (expanding #RGB), or `fallback` if it isn't a hex color."""
    match = _HEX_RE.match(str(color or "").strip())
    if not match:
        return fallback
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits.upper()}"


def parse_hex_rgb(color: str) -> tuple[int, int, int]:
    r, g, b = bytes.fromhex(normalize_hex(color, "#000000")[1:])
    return r, g, b


def mix_hex(color_a: str, color_b: str, ratio: float) -> str:
    """Linear blend: 0.0 gives `color_a`, 1.0 gives `color_b`."""
    weight = min(1.0, max(0.0, ratio))
    channels = (
        int(a * (1.0 - weight) + b * weight) for a, b in zip(parse_hex_rgb(color_a), parse_hex_rgb(color_b))
    )
    return "#" + "".join(f"{c:02X}" for c in channels)


def rgba(color: str, alpha: float) -> str:
    return "rgba({}, {}, {}, {:.3f})".format(*parse_hex_rgb(color), alpha)


def readable_ink(color: str) -> str:
    """Dark ink on light backgrounds, light ink on dark ones."""
    r, g, b = parse_hex_rgb(color)
    return "#0F172A" if 0.299 * r + 0.587 * g + 0.114 * b >= 170 else "#F8FAFC"


def resolve_theme(preset: object) -> Theme:
    """Look up a preset by name; unknown names fall back to the default preset."""
    name = str(preset or "")
    if name not in THEME_PRESETS:
        name = DEFAULT_THEME_PRESET
    primary, accent = THEME_PRESETS[name]
    return Theme(name, primary, accent)
