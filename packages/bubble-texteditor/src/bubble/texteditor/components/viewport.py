"""Vertically scrollable window over a list of rendered lines."""

from __future__ import annotations

from bubble.texteditor.buffer import clamp
from bubble.texteditor.utils import truncate_to_width


class Viewport:
    """Holds the latest full render and exposes a ``height``-row slice of it.

    Lines wider than ``width`` are cut at the right edge; there is no
    horizontal scrolling.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.y_offset = 0
        self._lines: list[str] = []

    @property
    def total_lines(self) -> int:
        return len(self._lines)

    def max_offset(self, total: int | None = None) -> int:
        if total is None:
            total = len(self._lines)
        return max(0, total - self.height)

    def set_size(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.y_offset = clamp(self.y_offset, 0, self.max_offset())

    def set_content(self, lines: list[str]) -> None:
        self._lines = list(lines)
        self.y_offset = clamp(self.y_offset, 0, self.max_offset())

    def goto_top(self) -> None:
        self.y_offset = 0

    def scroll_to(self, row: int, total: int | None = None) -> None:
        """Move the window the minimum amount needed to show *row*.

        *total* lets callers scroll before new content is set.
        """
        if row < self.y_offset:
            self.y_offset = row
        elif row >= self.y_offset + self.height:
            self.y_offset = row - self.height + 1
        self.y_offset = clamp(self.y_offset, 0, self.max_offset(total))

    def visible_range(self, total: int | None = None) -> range:
        if total is None:
            total = len(self._lines)
        start = clamp(self.y_offset, 0, self.max_offset(total))
        return range(start, min(total, start + self.height))

    def view_lines(self, overflow_row: int | None = None) -> list[str]:
        """Return the visible lines cut to ``width``.

        *overflow_row* may use one cell past the right edge, which is where
        a caret after the last character of a full line is drawn.
        """
        return [
            truncate_to_width(
                self._lines[i], self.width + 1 if i == overflow_row else self.width
            )
            for i in self.visible_range()
        ]

    def view(self) -> str:
        return "\n".join(self.view_lines())
