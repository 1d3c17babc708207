"""Tokenization and the caret-aware line formatter.

A line is tokenized by a pygments lexer picked through a fallback chain
(named lexer, then a guess from the source, then plain text). The formatter
walks the token stream, opens each token's style, and splits the one token
that holds the caret so exactly one cell is painted with the caret style.
All offsets are code point offsets into ``str`` values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.lexers.special import TextLexer
from pygments.token import Text, _TokenType
from pygments.util import ClassNotFound

from bubble.texteditor.buffer import clamp
from bubble.texteditor.theme import RESET, StyleEntry, StyleTable, default_theme

logger = logging.getLogger(__name__)

# Lexers must neither strip nor append newlines
_LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}
_BOM = "\ufeff"


class FormatError(Exception):
    """A line could not be formatted (bad token stream or tokenizer fault)."""


@dataclass
class Token:
    type: _TokenType
    text: str


@dataclass
class RenderResult:
    """Outcome of formatting one line.

    ``text`` is empty whenever ``error`` is set.
    """

    text: str
    error: FormatError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def get_lexer(syntax: str = "", source: str = "") -> Lexer:
    """Resolve *syntax* to a lexer, falling back to a guess, then plain text."""
    lexer: Lexer | None = None
    if syntax:
        try:
            lexer = get_lexer_by_name(syntax, **_LEXER_OPTIONS)
        except ClassNotFound:
            logger.debug("No lexer named %r, guessing from source", syntax)
    if lexer is None and source.strip():
        try:
            lexer = guess_lexer(source, **_LEXER_OPTIONS)
        except ClassNotFound:
            logger.debug("Could not guess a lexer, using plain text")
    if lexer is None:
        lexer = TextLexer(**_LEXER_OPTIONS)
    lexer.add_filter("tokenmerge")
    return lexer


def tokenize(line: str, lexer: Lexer) -> Iterator[Token]:
    """Yield the tokens of *line*, each carrying its exact slice of the line.

    Lexers rewrite some characters (``\\r`` becomes ``\\n``) and drop a
    leading byte order mark, so token lengths come from the lexer but the
    text always comes from *line*.
    """
    start = 0
    if line.startswith(_BOM):
        yield Token(Text, _BOM)
        start = len(_BOM)
    for ttype, text in lexer.get_tokens(line[start:]):
        end = start + len(text)
        yield Token(ttype, line[start:end])
        start = end


def token_before(tokens: Iterable[Token], column: int) -> tuple[int, Token] | None:
    """Find the token holding the code point just left of *column*.

    Returns ``(start_column, token)`` or ``None`` when *column* is 0 or past
    the end of the stream.
    """
    if column <= 0:
        return None
    start = 0
    for token in tokens:
        end = start + len(token.text)
        if start < column <= end:
            return start, token
        start = end
    return None


def _format_tokens(
    line: str,
    tokens: Iterable[Token],
    styles: StyleTable,
    caret_style: StyleEntry,
    has_caret: bool,
    caret_column: int,
) -> str:
    out: list[str] = []
    column = 0
    caret_done = False

    for token in tokens:
        entry = styles.get(token.type)
        opening = entry.sgr()
        text = token.text
        length = len(text)

        out.append(opening)
        if has_caret and not caret_done and column <= caret_column < column + length:
            pos = caret_column - column
            out.append(text[:pos])
            out.append(caret_style.sgr() + text[pos] + RESET)
            # The caret cell resets everything, so reopen the token's style
            out.append(opening)
            out.append(text[pos + 1 :])
            caret_done = True
        else:
            out.append(text)

        if not entry.is_zero():
            out.append(RESET)
        column += length

    if column != len(line):
        raise FormatError(
            f"token stream covers {column} code points, line has {len(line)}"
        )

    if has_caret and not caret_done:
        out.append(caret_style.sgr() + " " + RESET)

    return "".join(out)


def render_line(
    line: str,
    tokens: Iterable[Token],
    styles: StyleTable,
    caret_style: StyleEntry,
    has_caret: bool = False,
    caret_column: int = 0,
) -> RenderResult:
    """Format one line, overlaying the caret when *has_caret* is set.

    *caret_column* is clamped to the line and the theme's canvas colour is
    cleared first. Any failure, including one raised while the lexer
    produces tokens, is returned as ``RenderResult.error`` rather than
    raised.
    """
    caret_column = clamp(caret_column, 0, len(line))
    styles = styles.clear_background()
    try:
        text = _format_tokens(
            line, tokens, styles, caret_style, has_caret, caret_column
        )
    except FormatError as err:
        return RenderResult("", err)
    except Exception as err:
        return RenderResult("", FormatError(f"formatting failed: {err!r}"))
    return RenderResult(text)


def highlight(
    source: str,
    syntax: str = "",
    style: str = "",
    caret_style: StyleEntry | None = None,
    has_caret: bool = False,
    caret_column: int = 0,
) -> RenderResult:
    """Tokenize and format *source* in one call.

    *syntax* and *style* may be empty, in which case a best effort is made.
    """
    lexer = get_lexer(syntax, source)
    table = StyleTable.from_name(style)
    return render_line(
        source,
        tokenize(source, lexer),
        table,
        caret_style or default_theme().caret,
        has_caret,
        caret_column,
    )
