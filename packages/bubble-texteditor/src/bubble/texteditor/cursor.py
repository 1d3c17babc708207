"""Caret navigation over a :class:`~bubble.texteditor.buffer.LineBuffer`."""

from __future__ import annotations

from bubble.texteditor.buffer import Cursor, LineBuffer, clamp


class CursorController:
    """Moves the caret of one buffer.

    The controller holds no state of its own; position and the remembered
    horizontal offset live on ``buffer.cursor``. Every movement returns the
    resulting ``(row, col)``.
    """

    def __init__(self, buffer: LineBuffer) -> None:
        self._buffer = buffer

    @property
    def cursor(self) -> Cursor:
        return self._buffer.cursor

    @property
    def position(self) -> tuple[int, int]:
        return self.cursor.row, self.cursor.col

    def _current_length(self) -> int:
        return self._buffer.line_length(self.cursor.row)

    # -- Horizontal ----------------------------------------------------------

    def set_cursor(self, col: int) -> tuple[int, int]:
        self._buffer.clamp_cursor()
        self.cursor.col = clamp(col, 0, self._current_length())
        self.cursor.last_horizontal_offset = 0
        return self.position

    def cursor_start(self) -> tuple[int, int]:
        return self.set_cursor(0)

    def cursor_end(self) -> tuple[int, int]:
        return self.set_cursor(self._current_length())

    def move_right(self) -> tuple[int, int]:
        self._buffer.clamp_cursor()
        cur = self.cursor
        if cur.col < self._current_length():
            return self.set_cursor(cur.col + 1)
        if cur.row < self._buffer.line_count - 1:
            cur.row += 1
            return self.set_cursor(0)
        return self.position

    def move_left(self, stay_within_line: bool = False) -> tuple[int, int]:
        """Step one code point left, wrapping onto the end of the line above.

        After wrapping, *stay_within_line* stops the caret at the end of the
        previous line; without it one more leftward step is taken.
        """
        self._buffer.clamp_cursor()
        cur = self.cursor
        if cur.col == 0 and cur.row > 0:
            cur.row -= 1
            self.cursor_end()
            if stay_within_line:
                return self.position
        if cur.col > 0:
            return self.set_cursor(cur.col - 1)
        return self.set_cursor(cur.col)

    # -- Vertical ------------------------------------------------------------

    def move_down(self) -> tuple[int, int]:
        return self._move_vertical(1)

    def move_up(self) -> tuple[int, int]:
        return self._move_vertical(-1)

    def _move_vertical(self, delta: int) -> tuple[int, int]:
        self._buffer.clamp_cursor()
        cur = self.cursor
        target = cur.row + delta
        if not 0 <= target < self._buffer.line_count:
            return self.position

        if cur.last_horizontal_offset == 0:
            cur.last_horizontal_offset = cur.col
        cur.row = target
        # Ragged navigation: only clamp when the new line is too short
        length = self._current_length()
        if cur.col > length:
            cur.col = length
        return self.position
