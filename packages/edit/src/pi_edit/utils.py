"""
Terminal text utilities.

Provides:
- visible_width(): terminal column width of a string
- truncate_to_width(): cut a string so it fits in a number of columns
"""
from __future__ import annotations

import unicodedata

from wcwidth import wcwidth


def _char_width(ch: str) -> int:
    """Column width of one code point; control and combining chars take none."""
    w = wcwidth(ch)
    if w < 0:
        return 0
    return w


def _segment_graphemes(text: str) -> list[str]:
    """Group combining marks with their base character."""
    clusters: list[str] = []
    for ch in text:
        if clusters and (
            unicodedata.category(ch) in ("Mn", "Me", "Cf") or ord(ch) in (0x200D, 0xFE0F)
        ):
            clusters[-1] += ch
        else:
            clusters.append(ch)
    return clusters


def visible_width(s: str) -> int:
    """Calculate the visible terminal column width of a string."""
    if not s:
        return 0
    # Fast path: pure ASCII printable
    if s.isascii() and s.isprintable():
        return len(s)
    return sum(_char_width(g[0]) for g in _segment_graphemes(s))


def truncate_to_width(text: str, max_width: int) -> str:
    """
    Truncate *text* to at most *max_width* columns.

    Wide characters that would straddle the limit are dropped whole.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    result: list[str] = []
    current_width = 0
    for g in _segment_graphemes(text):
        gw = _char_width(g[0])
        if current_width + gw > max_width:
            break
        result.append(g)
        current_width += gw
    return "".join(result)
