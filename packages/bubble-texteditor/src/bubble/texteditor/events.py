"""Editor events and the reducer that applies them.

Every input the widget understands is one of the event dataclasses below.
:func:`update` is a pure function: it copies the incoming
:class:`EditorState`, applies the event to the copy and returns it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Literal

from bubble.texteditor.buffer import LineBuffer
from bubble.texteditor.components.selector import Selector
from bubble.texteditor.cursor import CursorController
from bubble.texteditor.keybindings import KeybindingsManager
from bubble.texteditor.keys import is_printable_input


@dataclass
class EditorState:
    """Everything an event can change: the buffer (with its caret) and the overlay."""

    buffer: LineBuffer = field(default_factory=LineBuffer)
    selector: Selector = field(default_factory=Selector)

    @property
    def cursor(self) -> CursorController:
        return CursorController(self.buffer)


# ---------------------------------------------------------------------------
# Event variants
# ---------------------------------------------------------------------------


@dataclass
class InsertText:
    text: str
    type: Literal["insert_text"] = "insert_text"


@dataclass
class InsertNewline:
    type: Literal["insert_newline"] = "insert_newline"


@dataclass
class DeleteCharacterBackward:
    type: Literal["delete_character_backward"] = "delete_character_backward"


@dataclass
class CharacterForward:
    type: Literal["character_forward"] = "character_forward"


@dataclass
class CharacterBackward:
    stay_within_line: bool = True
    type: Literal["character_backward"] = "character_backward"


@dataclass
class LineUp:
    type: Literal["line_up"] = "line_up"


@dataclass
class LineDown:
    type: Literal["line_down"] = "line_down"


@dataclass
class SetCursor:
    col: int
    type: Literal["set_cursor"] = "set_cursor"


@dataclass
class SetValue:
    text: str
    type: Literal["set_value"] = "set_value"


@dataclass
class Reset:
    type: Literal["reset"] = "reset"


@dataclass
class SelectUp:
    type: Literal["select_up"] = "select_up"


@dataclass
class SelectDown:
    type: Literal["select_down"] = "select_down"


@dataclass
class SelectConfirm:
    """Replace the ``prefix_length`` code points before the caret with the selection.

    ``None`` leaves the length to the widget, which measures the token
    under the caret.
    """

    prefix_length: int | None = None
    type: Literal["select_confirm"] = "select_confirm"


@dataclass
class SelectCancel:
    type: Literal["select_cancel"] = "select_cancel"


EditorEvent = (
    InsertText
    | InsertNewline
    | DeleteCharacterBackward
    | CharacterForward
    | CharacterBackward
    | LineUp
    | LineDown
    | SetCursor
    | SetValue
    | Reset
    | SelectUp
    | SelectDown
    | SelectConfirm
    | SelectCancel
)

# Events that may change the text and therefore refresh completions
EDIT_EVENTS = (
    InsertText,
    InsertNewline,
    DeleteCharacterBackward,
    SetValue,
    Reset,
    SelectConfirm,
)

# Events that only move the caret; completions follow the new position
CARET_EVENTS = (
    CharacterForward,
    CharacterBackward,
    LineUp,
    LineDown,
    SetCursor,
)


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def update(state: EditorState, event: EditorEvent) -> EditorState:
    """Return a new state with *event* applied; *state* is left untouched."""
    new = copy.deepcopy(state)
    buffer = new.buffer
    cursor = new.cursor
    selector = new.selector
    buffer.clamp_cursor()

    match event:
        case InsertText():
            buffer.insert_text(event.text)

        case InsertNewline():
            buffer.split_line(buffer.cursor.row, buffer.cursor.col)

        case DeleteCharacterBackward():
            buffer.delete_backward(buffer.cursor.row, buffer.cursor.col)

        case CharacterForward():
            cursor.move_right()

        case CharacterBackward():
            cursor.move_left(stay_within_line=event.stay_within_line)

        case LineUp():
            cursor.move_up()

        case LineDown():
            cursor.move_down()

        case SetCursor():
            cursor.set_cursor(event.col)

        case SetValue():
            buffer.set_value(event.text)
            selector.reset()

        case Reset():
            buffer.reset()
            selector.reset()

        case SelectUp():
            selector.move_up()

        case SelectDown():
            selector.move_down()

        case SelectConfirm():
            item = selector.selected_item()
            if item is not None:
                for _ in range(min(event.prefix_length or 0, buffer.cursor.col)):
                    buffer.delete_backward(buffer.cursor.row, buffer.cursor.col)
                buffer.insert_text(item.value)
            selector.reset()

        case SelectCancel():
            selector.reset()

    return new


def event_for_input(
    data: str,
    keybindings: KeybindingsManager,
    overlay_open: bool = False,
) -> EditorEvent | None:
    """Translate one chunk of raw terminal input into an event.

    While the overlay lists items, the selection keys take precedence over
    caret movement. ``SelectConfirm`` is returned without a prefix length;
    the widget fills it in from the token under the caret.
    """
    if overlay_open:
        if keybindings.matches(data, "selectUp"):
            return SelectUp()
        if keybindings.matches(data, "selectDown"):
            return SelectDown()
        if keybindings.matches(data, "selectConfirm"):
            return SelectConfirm()
        if keybindings.matches(data, "selectCancel"):
            return SelectCancel()

    if keybindings.matches(data, "characterForward"):
        return CharacterForward()
    if keybindings.matches(data, "characterBackward"):
        return CharacterBackward()
    if keybindings.matches(data, "lineUp"):
        return LineUp()
    if keybindings.matches(data, "lineDown"):
        return LineDown()
    if keybindings.matches(data, "deleteCharacterBackward"):
        return DeleteCharacterBackward()
    if keybindings.matches(data, "insertNewline"):
        return InsertNewline()
    if is_printable_input(data):
        return InsertText(data)
    return None
