"""Unicode helpers: grapheme segmentation, display width, character classes.

Cursor arithmetic in this package works on grapheme clusters (what a user
perceives as one character) and terminal placement works on display
columns. Both are derived here from the ``grapheme`` and ``wcwidth``
libraries.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Grapheme segmentation
# ---------------------------------------------------------------------------


def segment(text: str) -> list[str]:
    """Split *text* into grapheme clusters."""
    return list(grapheme.graphemes(text))


def grapheme_boundaries(text: str) -> list[int]:
    """Return every offset in *text* that sits between two clusters.

    The list always starts with ``0`` and ends with ``len(text)``.
    """
    bounds = [0]
    pos = 0
    for g in grapheme.graphemes(text):
        pos += len(g)
        bounds.append(pos)
    return bounds


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------


def is_word_grapheme(g: str) -> bool:
    """Return ``True`` if the cluster *g* belongs to a word.

    A cluster counts as a word character when its base code point is
    alphabetic, so ``"e\\u0301"`` is a word character and ``"'"``, ``"7"``
    or an emoji are separators.
    """
    return bool(g) and g[0].isalpha()


def has_control_chars(data: str) -> bool:
    """Return ``True`` if *data* contains any C0/C1 control character."""
    return any(
        ord(ch) < 32 or ord(ch) == 0x7F or (0x80 <= ord(ch) <= 0x9F)
        for ch in data
    )


# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Rules:
    1. Zero-width characters (control, combining marks, etc.) -> 0
    2. Emoji (VS16, ZWJ sequences, skin tones, flags) -> 2
    3. Otherwise delegate to wcwidth for the base code point.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF:  # Skin tone modifiers
            return 2
        if 0x1F1E6 <= cp <= 0x1F1FF:  # Regional indicators
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    Uses a fast path for printable ASCII and caches results for everything
    else.
    """
    if not text:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in text):
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += grapheme_width(g)

    return _cache_width(text, total)
