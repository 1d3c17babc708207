"""Line buffer: the text being edited plus the caret bound to it.

Lines are plain ``str`` values, so every column below is a code point
offset. Out-of-range rows and columns are clamped, never rejected, and a
structural edit that would exceed ``MAX_LINES`` is silently dropped.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_LINES = 99


def clamp(value: int, low: int, high: int) -> int:
    if high < low:
        low, high = high, low
    return min(high, max(low, value))


@dataclass
class Cursor:
    """Caret position inside a :class:`LineBuffer`.

    ``col`` may equal the line length, meaning "after the last character".
    ``last_horizontal_offset`` is remembered across consecutive vertical
    moves and reset by any horizontal edit or movement.
    """

    row: int = 0
    col: int = 0
    last_horizontal_offset: int = 0


class LineBuffer:
    """Ordered sequence of lines with splice-level edit primitives."""

    def __init__(self, max_lines: int = MAX_LINES) -> None:
        self._lines: list[str] = [""]
        self._max_lines = max(1, max_lines)
        self.cursor = Cursor()

    # -- Read access -------------------------------------------------------

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def max_lines(self) -> int:
        return self._max_lines

    def line(self, row: int) -> str:
        return self._lines[self._clamp_row(row)]

    def line_length(self, row: int) -> int:
        return len(self.line(row))

    def value(self) -> str:
        return "\n".join(self._lines)

    def is_full(self) -> bool:
        return len(self._lines) >= self._max_lines

    # -- Whole-buffer operations -------------------------------------------

    def reset(self) -> None:
        """Replace the content with a single empty line and home the caret."""
        self._lines = [""]
        self.cursor = Cursor()

    def set_value(self, text: str) -> None:
        self.reset()
        self.insert_text(text)

    # -- Splice primitives -------------------------------------------------

    def split_line(self, row: int, col: int) -> bool:
        """Break line *row* at *col*; the tail becomes a new line below.

        Returns ``False`` (and changes nothing) when the buffer is full.
        """
        if self.is_full():
            return False
        row = self._clamp_row(row)
        col = self._clamp_col(row, col)

        current = self._lines[row]
        self._lines[row : row + 1] = [current[:col], current[col:]]

        self._move_cursor(row + 1, 0)
        return True

    def merge_line_above(self, row: int) -> bool:
        """Append line *row* to the line above it and remove it.

        The caret lands on the junction point. Row 0 has nothing above it,
        so merging it is a no-op.
        """
        row = self._clamp_row(row)
        if row <= 0:
            return False

        junction = len(self._lines[row - 1])
        self._lines[row - 1 : row + 1] = [self._lines[row - 1] + self._lines[row]]

        self._move_cursor(row - 1, junction)
        return True

    def insert_codepoint(self, row: int, col: int, ch: str) -> None:
        """Insert the single code point *ch* at (*row*, *col*).

        A newline is turned into :meth:`split_line`, which drops it when
        the buffer is full.
        """
        if ch == "\n":
            self.split_line(row, col)
            return
        row = self._clamp_row(row)
        col = self._clamp_col(row, col)

        current = self._lines[row]
        self._lines[row] = current[:col] + ch + current[col:]
        self._move_cursor(row, col + len(ch))

    def insert_text(self, text: str) -> None:
        """Insert *text* at the caret, splitting lines at each newline.

        A single trailing newline is not turned into an empty last line
        when the insertion happens at the very end of the buffer, so
        ``set_value("a\\n")`` yields one line.
        """
        if not text:
            return

        segments = text.split("\n")
        if len(segments) > 1 and segments[-1] == "" and self._at_end_of_buffer():
            segments.pop()

        for i, segment in enumerate(segments):
            if i > 0:
                self.split_line(self.cursor.row, self.cursor.col)
            for ch in segment:
                self.insert_codepoint(self.cursor.row, self.cursor.col, ch)

    def delete_backward(self, row: int, col: int) -> None:
        """Remove the code point before (*row*, *col*).

        At column 0 the line is merged into the one above instead; at the
        very start of the buffer nothing happens.
        """
        row = self._clamp_row(row)
        col = self._clamp_col(row, col)

        if col > 0:
            current = self._lines[row]
            self._lines[row] = current[: col - 1] + current[col:]
            self._move_cursor(row, col - 1)
        elif row > 0:
            self.merge_line_above(row)
        else:
            self._move_cursor(0, 0)

    # -- Cursor bookkeeping ------------------------------------------------

    def clamp_cursor(self) -> None:
        """Re-establish ``0 <= row < line_count`` and ``0 <= col <= len``."""
        self.cursor.row = self._clamp_row(self.cursor.row)
        self.cursor.col = self._clamp_col(self.cursor.row, self.cursor.col)

    def _move_cursor(self, row: int, col: int) -> None:
        self.cursor.row = row
        self.cursor.col = col
        self.cursor.last_horizontal_offset = 0
        self.clamp_cursor()

    def _at_end_of_buffer(self) -> bool:
        last = len(self._lines) - 1
        return self.cursor.row == last and self.cursor.col >= len(self._lines[last])

    def _clamp_row(self, row: int) -> int:
        return clamp(row, 0, len(self._lines) - 1)

    def _clamp_col(self, row: int, col: int) -> int:
        return clamp(col, 0, len(self._lines[row]))
