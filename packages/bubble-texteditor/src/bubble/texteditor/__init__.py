"""bubble-texteditor: line-oriented text buffer with caret-aware syntax highlighting."""

# Buffer and caret
from bubble.texteditor.buffer import MAX_LINES, Cursor, LineBuffer, clamp

# Components (re-exported from components package)
from bubble.texteditor.components import (
    IntellisenseHook,
    IntellisenseItem,
    Selector,
    TextArea,
    TextAreaOptions,
    Viewport,
)
from bubble.texteditor.cursor import CursorController

# Events and reducer
from bubble.texteditor.events import (
    EditorEvent,
    EditorState,
    event_for_input,
    update,
)

# Tokenization and rendering
from bubble.texteditor.highlight import (
    FormatError,
    RenderResult,
    Token,
    get_lexer,
    highlight,
    render_line,
    tokenize,
)

# Keybindings
from bubble.texteditor.keybindings import (
    DEFAULT_KEYBINDINGS,
    EditorAction,
    KeybindingsManager,
)
from bubble.texteditor.keys import KeyId, matches_key, parse_key

# Styling
from bubble.texteditor.theme import StyleEntry, StyleTable, TextAreaTheme, default_theme

# Utilities
from bubble.texteditor.utils import truncate_to_width, visible_width

__all__ = [
    # Buffer
    "MAX_LINES",
    "Cursor",
    "CursorController",
    "LineBuffer",
    "clamp",
    # Components
    "IntellisenseHook",
    "IntellisenseItem",
    "Selector",
    "TextArea",
    "TextAreaOptions",
    "Viewport",
    # Events
    "EditorEvent",
    "EditorState",
    "event_for_input",
    "update",
    # Highlighting
    "FormatError",
    "RenderResult",
    "Token",
    "get_lexer",
    "highlight",
    "render_line",
    "tokenize",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "EditorAction",
    "KeybindingsManager",
    # Keys
    "KeyId",
    "matches_key",
    "parse_key",
    # Styling
    "StyleEntry",
    "StyleTable",
    "TextAreaTheme",
    "default_theme",
    # Utilities
    "truncate_to_width",
    "visible_width",
]
