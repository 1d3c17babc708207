"""Visual attributes: style entries, the lexical style table and the widget theme.

Nothing here is module-level mutable state; a :class:`TextAreaTheme` and a
:class:`StyleTable` are built once and handed to the components that need
them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache

from pygments.style import Style, ansicolors
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "default"
RESET = "\x1b[0m"

# Foreground SGR codes of the 16 pygments ansi colour names; background is +10
_ANSI_CODES = {
    "ansiblack": 30,
    "ansired": 31,
    "ansigreen": 32,
    "ansiyellow": 33,
    "ansiblue": 34,
    "ansimagenta": 35,
    "ansicyan": 36,
    "ansigray": 37,
    "ansibrightblack": 90,
    "ansibrightred": 91,
    "ansibrightgreen": 92,
    "ansibrightyellow": 93,
    "ansibrightblue": 94,
    "ansibrightmagenta": 95,
    "ansibrightcyan": 96,
    "ansiwhite": 97,
}


def _normalize_hex(color: str | None) -> str | None:
    """Return *color* as six lowercase hex digits without ``#``, or ``None``.

    Pygments ansi colour names (``ansired``, ``ansibrightblue``, ...) are
    passed through unchanged.
    """
    if not color:
        return None
    if color in ansicolors:
        return color
    value = color.lstrip("#").lower()
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        logger.debug("Dropping unsupported colour %r", color)
        return None
    try:
        int(value, 16)
    except ValueError:
        logger.debug("Dropping unsupported colour %r", color)
        return None
    return value


def _rgb(color: str) -> tuple[int, int, int]:
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def _color_sgr(color: str, background: bool) -> str:
    if color in ansicolors:
        code = _ANSI_CODES[color]
        return "\x1b[%dm" % (code + 10 if background else code)
    return "\x1b[%d;2;%d;%d;%dm" % ((48 if background else 38), *_rgb(color))


@dataclass
class StyleEntry:
    """Terminal attributes for one token type (or the caret cell)."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: str | None = None
    background: str | None = None

    def __post_init__(self) -> None:
        self.color = _normalize_hex(self.color)
        self.background = _normalize_hex(self.background)

    def is_zero(self) -> bool:
        return not (
            self.bold or self.italic or self.underline or self.color or self.background
        )

    def sgr(self) -> str:
        """Opening escape codes; empty for a zero entry."""
        out = ""
        if self.bold:
            out += "\x1b[1m"
        if self.underline:
            out += "\x1b[4m"
        if self.italic:
            out += "\x1b[3m"
        if self.color:
            out += _color_sgr(self.color, background=False)
        if self.background:
            out += _color_sgr(self.background, background=True)
        return out

    def render(self, text: str) -> str:
        if self.is_zero():
            return text
        return f"{self.sgr()}{text}{RESET}"


@lru_cache(maxsize=16)
def _load_style(name: str) -> type[Style]:
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        logger.debug("Unknown style %r, falling back to %r", name, DEFAULT_STYLE)
        return get_style_by_name(DEFAULT_STYLE)


class StyleTable:
    """Resolves token types to :class:`StyleEntry` values for one pygments style.

    Token types the style does not mention inherit from their nearest
    ancestor; a type with no styled ancestor resolves to a zero entry.
    """

    def __init__(self, style: type[Style], keep_background: bool = True) -> None:
        self._style = style
        self._keep_background = keep_background
        self._canvas = _normalize_hex(getattr(style, "background_color", None))
        self._cache: dict[_TokenType, StyleEntry] = {}
        self._cleared: StyleTable | None = None

    @classmethod
    def from_name(cls, name: str) -> StyleTable:
        return cls(_load_style(name or DEFAULT_STYLE))

    @property
    def name(self) -> str:
        return getattr(self._style, "name", DEFAULT_STYLE)

    def clear_background(self) -> StyleTable:
        """Return a table whose entries never paint the theme's canvas colour."""
        if not self._keep_background:
            return self
        if self._cleared is None:
            self._cleared = StyleTable(self._style, keep_background=False)
        return self._cleared

    def get(self, ttype: _TokenType) -> StyleEntry:
        cached = self._cache.get(ttype)
        if cached is not None:
            return cached

        lookup = ttype
        while not self._style.styles_token(lookup) and lookup.parent is not None:
            lookup = lookup.parent
        if not self._style.styles_token(lookup):
            entry = StyleEntry()
        else:
            raw = self._style.style_for_token(lookup)
            background = raw.get("bgansicolor") or raw.get("bgcolor")
            if not self._keep_background and _normalize_hex(background) == self._canvas:
                background = None
            entry = StyleEntry(
                bold=bool(raw.get("bold")),
                italic=bool(raw.get("italic")),
                underline=bool(raw.get("underline")),
                color=raw.get("ansicolor") or raw.get("color"),
                background=background,
            )
        self._cache[ttype] = entry
        return entry


@dataclass
class TextAreaTheme:
    """Widget-level styling, independent of the lexical style table."""

    caret: StyleEntry = field(
        default_factory=lambda: StyleEntry(bold=True, background="cd0000")
    )
    selector_line: StyleEntry = field(
        default_factory=lambda: StyleEntry(background="333333")
    )
    selector_selected: StyleEntry = field(
        default_factory=lambda: StyleEntry(
            bold=True, color="000000", background="33aa66"
        )
    )


def default_theme() -> TextAreaTheme:
    return TextAreaTheme()
