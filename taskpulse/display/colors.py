"""Deterministic label coloring.

A label (usually a package or group name) always maps to the same palette
entry within a process.  The choice is an MD5-based hash so it is also
stable across processes, and it is memoised per label.
"""

from __future__ import annotations

import colorsys
import hashlib

PALETTE: tuple[str, ...] = (
    "#e5b567",
    "#b4d273",
    "#e87d3e",
    "#9e86c8",
    "#b05279",
    "#6c99bb",
)

_assigned: dict[str, int] = {}


def assign_color(label: str) -> str:
    """Return the palette color for *label*."""
    if label not in _assigned:
        _assigned[label] = _hash_label(label) % len(PALETTE)
    return PALETTE[_assigned[label]]


def _hash_label(label: str) -> int:
    digest = hashlib.md5(label.encode("utf-8")).hexdigest()
    return int(digest[:6], 16)


def darken(hex_color: str, amount: float) -> str:
    """Reduce the HSL lightness of *hex_color* by the fraction *amount*."""
    value = hex_color.lstrip("#")
    r, g, b = (int(value[i : i + 2], 16) / 255 for i in (0, 2, 4))
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    l = max(0.0, min(1.0, l * (1 - amount)))
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))
