"""Multi-line syntax-highlighted text area with a completion overlay.

The widget owns an :class:`~bubble.texteditor.events.EditorState` and
replaces it through :func:`~bubble.texteditor.events.update` for every
event. Rendering re-tokenizes the visible lines on each call and never
touches the buffer.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from pygments.lexer import Lexer
from pygments.token import Text

from bubble.texteditor.buffer import MAX_LINES, LineBuffer, clamp
from bubble.texteditor.components.selector import (
    DEFAULT_SELECTOR_HEIGHT,
    IntellisenseItem,
    Selector,
)
from bubble.texteditor.components.viewport import Viewport
from bubble.texteditor.events import (
    CARET_EVENTS,
    EDIT_EVENTS,
    CharacterBackward,
    CharacterForward,
    EditorEvent,
    EditorState,
    InsertText,
    LineDown,
    LineUp,
    Reset,
    SelectConfirm,
    SetCursor,
    SetValue,
    event_for_input,
    update,
)
from bubble.texteditor.highlight import (
    FormatError,
    Token,
    get_lexer,
    render_line,
    token_before,
    tokenize,
)
from bubble.texteditor.keybindings import KeybindingsManager
from bubble.texteditor.theme import DEFAULT_STYLE, StyleTable, TextAreaTheme, default_theme
from bubble.texteditor.utils import truncate_to_width, visible_width

logger = logging.getLogger(__name__)

MIN_HEIGHT = 1
MIN_WIDTH = 2
DEFAULT_HEIGHT = 6
DEFAULT_WIDTH = 40
MAX_HEIGHT = MAX_LINES
MAX_WIDTH = 500

IntellisenseHook = Callable[[Token], list[IntellisenseItem]]


@dataclass
class TextAreaOptions:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    syntax: str = ""
    style: str = DEFAULT_STYLE
    selector_max_visible: int = DEFAULT_SELECTOR_HEIGHT


def _finite_int(value: float, default: int) -> int:
    if not math.isfinite(value):
        return default
    return int(value)


class TextArea:
    """Editable text area rendered with syntax highlighting and a caret overlay."""

    def __init__(
        self,
        options: TextAreaOptions | None = None,
        theme: TextAreaTheme | None = None,
        keybindings: KeybindingsManager | None = None,
    ) -> None:
        if options is None:
            options = TextAreaOptions()

        self._theme = theme or default_theme()
        self._keybindings = keybindings or KeybindingsManager()

        max_visible = max(1, _finite_int(options.selector_max_visible, DEFAULT_SELECTOR_HEIGHT))
        self._state = EditorState(
            buffer=LineBuffer(MAX_LINES),
            selector=Selector(self._theme, max_visible=max_visible),
        )

        self._viewport = Viewport(DEFAULT_WIDTH, DEFAULT_HEIGHT)
        self.set_size(options.width, options.height)

        self._syntax = options.syntax
        self._styles = StyleTable.from_name(options.style)
        self._lexer: Lexer | None = None

        self.focused: bool = True
        self.last_error: FormatError | None = None

        # Public callbacks
        self.intellisense: IntellisenseHook | None = None
        self.on_change: Callable[[str], None] | None = None

    # -- Focus ---------------------------------------------------------------

    def focus(self) -> None:
        self.focused = True
        self._state.selector.focus()

    def blur(self) -> None:
        self.focused = False
        self._state.selector.blur()

    # -- Configuration -------------------------------------------------------

    @property
    def width(self) -> int:
        return self._viewport.width

    @property
    def height(self) -> int:
        return self._viewport.height

    def set_size(self, width: int, height: int) -> None:
        width = clamp(_finite_int(width, DEFAULT_WIDTH), MIN_WIDTH, MAX_WIDTH)
        height = clamp(_finite_int(height, DEFAULT_HEIGHT), MIN_HEIGHT, MAX_HEIGHT)
        self._viewport.set_size(width, height)

    @property
    def syntax(self) -> str:
        return self._syntax

    def set_syntax(self, syntax: str) -> None:
        self._syntax = syntax
        self._lexer = None

    def set_style(self, style: str) -> None:
        self._styles = StyleTable.from_name(style)

    # -- State access --------------------------------------------------------

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def selector(self) -> Selector:
        return self._state.selector

    @property
    def cursor(self) -> tuple[int, int]:
        c = self._state.buffer.cursor
        return c.row, c.col

    @property
    def line_count(self) -> int:
        return self._state.buffer.line_count

    @property
    def scroll_offset(self) -> int:
        return self._viewport.y_offset

    def value(self) -> str:
        return self._state.buffer.value()

    # -- Editing API ---------------------------------------------------------

    def set_value(self, text: str) -> None:
        self._lexer = None
        self.update(SetValue(text))

    def insert_text(self, text: str) -> None:
        self.update(InsertText(text))

    def reset(self) -> None:
        self._lexer = None
        self.update(Reset())
        self._viewport.goto_top()

    def move_right(self) -> tuple[int, int]:
        self.update(CharacterForward())
        return self.cursor

    def move_left(self, stay_within_line: bool = True) -> tuple[int, int]:
        self.update(CharacterBackward(stay_within_line=stay_within_line))
        return self.cursor

    def move_up(self) -> tuple[int, int]:
        self.update(LineUp())
        return self.cursor

    def move_down(self) -> tuple[int, int]:
        self.update(LineDown())
        return self.cursor

    def set_cursor(self, col: int) -> tuple[int, int]:
        self.update(SetCursor(col))
        return self.cursor

    # -- Event handling ------------------------------------------------------

    def update(self, event: EditorEvent) -> None:
        """Apply *event* and refresh everything derived from the new state."""
        if isinstance(event, SelectConfirm) and event.prefix_length is None:
            event = SelectConfirm(prefix_length=self._completion_prefix_length())

        self._state = update(self._state, event)

        if isinstance(event, EDIT_EVENTS):
            self._refresh_completions()
            if self.on_change:
                self.on_change(self.value())
        elif isinstance(event, CARET_EVENTS):
            self._refresh_completions()

        buffer = self._state.buffer
        self._viewport.scroll_to(buffer.cursor.row, buffer.line_count)

    def handle_input(self, data: str) -> None:
        """Handle raw terminal input; ignored while blurred."""
        if not self.focused:
            return
        selector = self._state.selector
        event = event_for_input(
            data,
            self._keybindings,
            overlay_open=selector.focused and selector.has_items(),
        )
        if event is not None:
            self.update(event)

    # -- Completion ----------------------------------------------------------

    def _caret_token(self) -> tuple[int, Token] | None:
        buffer = self._state.buffer
        row, col = buffer.cursor.row, buffer.cursor.col
        return token_before(tokenize(buffer.line(row), self._get_lexer()), col)

    def _completion_prefix_length(self) -> int:
        found = self._caret_token()
        if found is None:
            return 0
        start, _token = found
        return self._state.buffer.cursor.col - start

    def _refresh_completions(self) -> None:
        if self.intellisense is None:
            return

        items: list[IntellisenseItem] = []
        try:
            found = self._caret_token()
            if found is not None:
                items = list(self.intellisense(found[1]))
        except Exception:
            logger.exception("Completion hook failed")
            items = []

        selector = self._state.selector
        if items != selector.items:
            selector.set_items(items)
            selector.reset_selection()

    # -- Rendering -----------------------------------------------------------

    def _get_lexer(self) -> Lexer:
        if self._lexer is not None:
            return self._lexer
        lexer = get_lexer(self._syntax, self.value())
        # Keep guessing until there is text to guess from
        if self._syntax or self.value().strip():
            self._lexer = lexer
        return lexer

    def _render_row(self, row: int, line: str, lexer: Lexer) -> str:
        cursor = self._state.buffer.cursor
        has_caret = self.focused and row == cursor.row
        result = render_line(
            line,
            tokenize(line, lexer),
            self._styles,
            self._theme.caret,
            has_caret,
            cursor.col,
        )
        if result.ok:
            return result.text

        logger.warning("Failed to format line %d: %s", row, result.error)
        self.last_error = result.error
        plain = render_line(
            line,
            [Token(Text, line)],
            self._styles,
            self._theme.caret,
            has_caret,
            cursor.col,
        )
        return plain.text if plain.ok else line

    def _caret_overflow_row(self, limit: int) -> int | None:
        """Row whose trailing caret cell would fall just past *limit*, if any."""
        buffer = self._state.buffer
        cursor = buffer.cursor
        line = buffer.line(cursor.row)
        if self.focused and cursor.col >= len(line) and visible_width(line) <= limit:
            return cursor.row
        return None

    def render(self, width: int | None = None) -> list[str]:
        """Render the visible window followed by the completion overlay."""
        buffer = self._state.buffer
        buffer.clamp_cursor()
        lines = buffer.lines

        self._viewport.scroll_to(buffer.cursor.row, len(lines))
        visible = self._viewport.visible_range(len(lines))
        lexer = self._get_lexer()
        self.last_error = None

        rendered = [
            self._render_row(row, line, lexer) if row in visible else line
            for row, line in enumerate(lines)
        ]
        self._viewport.set_content(rendered)

        out = self._viewport.view_lines(self._caret_overflow_row(self.width))

        max_width = self.width if width is None else min(width, self.width)
        if max_width < self.width:
            overflow_row = self._caret_overflow_row(max_width)
            out = [
                truncate_to_width(
                    line, max_width + 1 if row == overflow_row else max_width
                )
                for row, line in zip(visible, out)
            ]

        selector = self._state.selector
        if self.focused and selector.has_items():
            selector.set_offset(min(buffer.cursor.col, max(0, max_width - 1)))
            out.extend(selector.render(max_width))
        return out

    def view(self) -> str:
        return "\n".join(self.render())
