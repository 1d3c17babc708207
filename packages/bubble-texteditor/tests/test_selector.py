"""Tests for the completion overlay (Selector)."""

from __future__ import annotations

from bubble.texteditor.components.selector import IntellisenseItem, Selector
from bubble.texteditor.theme import StyleEntry, TextAreaTheme
from bubble.texteditor.utils import strip_ansi


def _items(*values: str) -> list[IntellisenseItem]:
    return [IntellisenseItem(value=v, kind="table") for v in values]


def _plain_theme() -> TextAreaTheme:
    return TextAreaTheme(
        caret=StyleEntry(bold=True),
        selector_line=StyleEntry(),
        selector_selected=StyleEntry(underline=True),
    )


class TestSelectorNavigation:
    def test_clamped_at_both_ends(self) -> None:
        sel = Selector()
        sel.set_items(_items("table1", "table2"))
        assert sel.selected_index == 0
        assert sel.move_down() == 1
        assert sel.move_down() == 1
        assert sel.move_up() == 0
        assert sel.move_up() == 0

    def test_navigation_on_empty_list_is_noop(self) -> None:
        sel = Selector()
        assert sel.move_down() is None
        assert sel.move_up() is None
        assert sel.selected_item() is None

    def test_selected_item(self) -> None:
        sel = Selector()
        sel.set_items(_items("table1", "table2"))
        sel.move_down()
        assert sel.selected_item() == IntellisenseItem("table2", "table")


class TestSelectorItems:
    def test_set_items_keeps_selection(self) -> None:
        sel = Selector()
        sel.set_items(_items("a", "b", "c"))
        sel.move_down()
        sel.set_items(_items("x", "y", "z"))
        assert sel.selected_index == 1

    def test_set_items_keeps_selection_in_range(self) -> None:
        sel = Selector()
        sel.set_items(_items("a", "b", "c"))
        sel.move_down()
        sel.move_down()
        sel.set_items(_items("x"))
        assert sel.selected_index == 0

    def test_set_items_copies_list(self) -> None:
        items = _items("a")
        sel = Selector()
        sel.set_items(items)
        items.append(IntellisenseItem("b"))
        assert len(sel.items) == 1

    def test_reset(self) -> None:
        sel = Selector()
        sel.set_items(_items("a", "b"))
        sel.move_down()
        sel.reset()
        assert not sel.has_items()
        assert sel.selected_index is None


class TestSelectorRender:
    def test_empty_renders_nothing(self) -> None:
        assert Selector().render() == []

    def test_lists_all_items_in_order(self) -> None:
        sel = Selector(_plain_theme())
        sel.set_items(_items("table1", "table2", "table3"))
        lines = [strip_ansi(line) for line in sel.render()]
        assert lines == [" table1 ", " table2 ", " table3 "]

    def test_selected_row_is_marked(self) -> None:
        sel = Selector(_plain_theme())
        sel.set_items(_items("table1", "table2"))
        sel.move_down()
        lines = sel.render()
        assert "\x1b[4m" not in lines[0]
        assert lines[1].startswith("\x1b[4m")

    def test_offset_pads_every_row(self) -> None:
        sel = Selector(_plain_theme())
        sel.set_items(_items("a", "b"))
        sel.set_offset(3)
        assert all(line.startswith("   ") for line in sel.render())

    def test_window_follows_selection(self) -> None:
        sel = Selector(_plain_theme(), max_visible=2)
        sel.set_items(_items("a", "b", "c", "d"))
        for _ in range(3):
            sel.move_down()
        lines = [strip_ansi(line) for line in sel.render()]
        assert lines == [" c ", " d "]

    def test_blurred_renders_nothing(self) -> None:
        sel = Selector()
        sel.set_items(_items("a"))
        sel.blur()
        assert sel.render() == []
