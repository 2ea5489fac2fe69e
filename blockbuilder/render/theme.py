"""Theme tokens shared by every section template."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

RADIUS = {
    "none": "0",
    "sm": "2px",
    "md": "6px",
    "lg": "8px",
    "xl": "12px",
    "2xl": "16px",
    "pill": "9999px",
}

SHADOW = {
    "none": "none",
    "soft": "0 1px 2px rgba(0,0,0,.05)",
    "medium": "0 4px 6px rgba(0,0,0,.1)",
    "elevated": "0 10px 15px rgba(0,0,0,.1)",
    "dramatic": "0 25px 50px rgba(0,0,0,.25)",
}


def hex_to_rgb(value: Optional[str]) -> Tuple[int, int, int]:
    match = _HEX_RE.match(value or "#2563eb")
    if not match:
        return 37, 99, 235
    return int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16)


def tint(value: Optional[str], factor: float = 0.85) -> str:
    r, g, b = hex_to_rgb(value)
    return "rgb({}, {}, {})".format(*(round(255 - (255 - c) * factor) for c in (r, g, b)))


def get_theme_tokens(theme: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
    theme = theme or {}
    preset = str(theme.get("stylePreset") or "").lower()
    primary = str(theme.get("primaryColor") or "#2563eb")
    secondary = str(theme.get("secondaryColor") or "#1e40af")
    accent = str(theme.get("accentColor") or "#f59e0b")
    radius = RADIUS.get(str(theme.get("borderRadius") or "lg"), RADIUS["lg"])
    shadow = SHADOW.get(str(theme.get("shadow") or "soft").lower(), SHADOW["soft"])
    dark = preset in ("bold", "dark")

    if preset == "gradient":
        page_bg = f"linear-gradient(135deg, {tint(primary, 0.92)} 0%, {tint(secondary, 0.85)} 100%)"
    elif dark:
        page_bg = "#0f172a"
    else:
        page_bg = "#ffffff"

    if dark:
        card_bg, card_fg, card_border = "#1e293b", "#f8fafc", "#334155"
    elif preset == "glass":
        card_bg, card_fg, card_border = "rgba(255,255,255,.6)", "#171717", "rgba(255,255,255,.3)"
    else:
        card_bg, card_fg, card_border = "#ffffff", "#171717", "#e5e5e5"

    card_style = (
        f"background:{card_bg};color:{card_fg};border:1px solid {card_border};"
        f"border-radius:{radius};box-shadow:{shadow};padding:24px;margin-bottom:24px"
    )

    return {
        "preset": preset,
        "card_style": card_style,
        "primary": primary,
        "secondary": secondary,
        "accent": accent,
        "radius": radius,
        "shadow": shadow,
        "page_bg": page_bg,
        "card_bg": card_bg,
        "card_fg": card_fg,
        "card_border": card_border,
        "text_muted": "#cbd5e1" if dark else "#525252",
    }
