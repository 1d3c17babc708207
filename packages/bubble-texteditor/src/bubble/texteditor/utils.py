"""Terminal text utilities: SGR handling and cell-width measurement.

The editor only ever emits SGR sequences (``ESC[ ... m``), so the helpers
here recognize just those when skipping escape codes.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth


_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")

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


def _grapheme_width(g: str) -> int:
    """Return the terminal cell width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation selector, ZWJ sequences and skin tones render wide
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF:
            return 2

    first = g[0]
    cat = unicodedata.category(first)
    if cat.startswith("M") or cat == "Cf":
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from *text*."""
    return _SGR_RE.sub("", text)


def visible_width(text: str) -> int:
    """Calculate the number of terminal cells *text* occupies.

    SGR sequences are ignored. Pure printable ASCII takes a fast path,
    everything else is measured per grapheme cluster and cached.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def _extract_sgr(text: str, pos: int) -> str | None:
    """Return the SGR sequence starting at *pos*, or ``None``."""
    if text.startswith("\x1b[", pos):
        match = _SGR_RE.match(text, pos)
        if match:
            return match.group(0)
    return None


def truncate_to_width(text: str, max_width: int, pad: bool = False) -> str:
    """Cut *text* so it occupies at most *max_width* cells.

    Escape sequences are kept (they take no cells) and the cut always falls
    on a grapheme boundary. When *pad* is set the result is right-padded
    with blanks to exactly *max_width* cells.
    """
    if max_width <= 0:
        return ""

    text_width = visible_width(text)
    if text_width <= max_width:
        if pad:
            return text + " " * (max_width - text_width)
        return text

    out: list[str] = []
    cols = 0
    i = 0
    truncated = False
    while i < len(text):
        code = _extract_sgr(text, i)
        if code is not None:
            out.append(code)
            i += len(code)
            continue

        # Consume one grapheme cluster up to the next escape sequence
        end = text.find("\x1b", i)
        run = text[i:] if end == -1 else text[i:end]
        g = next(grapheme.graphemes(run), run[0])
        w = _grapheme_width(g)
        if cols + w > max_width:
            truncated = True
            break
        out.append(g)
        cols += w
        i += len(g)

    if truncated:
        # Keep trailing resets so styles do not bleed past the cut
        if "\x1b[0m" in text[i:]:
            out.append("\x1b[0m")

    result = "".join(out)
    if pad and cols < max_width:
        result += " " * (max_width - cols)
    return result
