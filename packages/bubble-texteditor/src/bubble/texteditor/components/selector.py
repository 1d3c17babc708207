"""Completion overlay: a focusable list of candidates with one selected row."""

from __future__ import annotations

from dataclasses import dataclass

from bubble.texteditor.components.viewport import Viewport
from bubble.texteditor.theme import TextAreaTheme, default_theme

DEFAULT_SELECTOR_WIDTH = 20
DEFAULT_SELECTOR_HEIGHT = 8


@dataclass
class IntellisenseItem:
    value: str
    kind: str = ""


class Selector:
    """Candidate list driven by the completion hook.

    ``set_items`` replaces the list without touching the selection; callers
    reset it with :meth:`reset_selection` when the new list warrants it.
    """

    def __init__(
        self,
        theme: TextAreaTheme | None = None,
        max_visible: int = DEFAULT_SELECTOR_HEIGHT,
        width: int = DEFAULT_SELECTOR_WIDTH,
    ) -> None:
        self._theme = theme or default_theme()
        self._viewport = Viewport(width, max(1, max_visible))
        self._items: list[IntellisenseItem] = []
        self._selected_index = 0
        self._offset = 0
        self.focused: bool = True

    # -- Focus ---------------------------------------------------------------

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    # -- Items ---------------------------------------------------------------

    @property
    def items(self) -> list[IntellisenseItem]:
        return list(self._items)

    @property
    def selected_index(self) -> int | None:
        if not self._items:
            return None
        return self._selected_index

    @property
    def offset(self) -> int:
        return self._offset

    def set_offset(self, offset: int) -> None:
        self._offset = max(0, offset)

    def set_items(self, items: list[IntellisenseItem]) -> None:
        self._items = list(items)
        # Keep the selection addressable when the list shrank
        if self._items and self._selected_index >= len(self._items):
            self._selected_index = len(self._items) - 1

    def reset_selection(self) -> None:
        self._selected_index = 0
        self._viewport.goto_top()

    def reset(self) -> None:
        self._items = []
        self.reset_selection()

    def has_items(self) -> bool:
        return bool(self._items)

    def selected_item(self) -> IntellisenseItem | None:
        if not self._items:
            return None
        return self._items[self._selected_index]

    # -- Navigation ----------------------------------------------------------

    def move_up(self) -> int | None:
        if self._items and self._selected_index > 0:
            self._selected_index -= 1
        return self.selected_index

    def move_down(self) -> int | None:
        if self._items and self._selected_index < len(self._items) - 1:
            self._selected_index += 1
        return self.selected_index

    # -- Rendering -----------------------------------------------------------

    def render(self, width: int | None = None) -> list[str]:
        """Render every item top to bottom, shifted right by ``offset`` cells.

        Only ``max_visible`` rows are shown at once; the window follows the
        selection.
        """
        if not self._items or not self.focused:
            return []

        rows: list[str] = []
        for index, item in enumerate(self._items):
            style = (
                self._theme.selector_selected
                if index == self._selected_index
                else self._theme.selector_line
            )
            rows.append(style.render(f" {item.value} "))

        if width is not None:
            self._viewport.width = max(0, width - self._offset)
        self._viewport.set_content(rows)
        self._viewport.scroll_to(self._selected_index)

        blank = " " * self._offset
        return [blank + line for line in self._viewport.view_lines()]
