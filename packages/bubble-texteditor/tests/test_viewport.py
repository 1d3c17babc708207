"""Tests for bubble.texteditor.components.viewport.Viewport."""

from __future__ import annotations

from bubble.texteditor.components.viewport import Viewport


def _lines(n: int) -> list[str]:
    return [f"line{i}" for i in range(n)]


class TestViewportView:
    def test_shows_first_rows(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        assert vp.view_lines() == ["line0", "line1", "line2"]

    def test_short_content_is_not_padded(self) -> None:
        vp = Viewport(20, 5)
        vp.set_content(_lines(2))
        assert vp.view() == "line0\nline1"

    def test_wide_lines_are_clipped(self) -> None:
        vp = Viewport(4, 2)
        vp.set_content(["abcdefgh"])
        assert vp.view_lines() == ["abcd"]

    def test_overflow_row_keeps_one_more_cell(self) -> None:
        vp = Viewport(3, 2)
        vp.set_content(["abcd", "efgh"])
        assert vp.view_lines(overflow_row=0) == ["abcd", "efg"]


class TestViewportScrolling:
    def test_scroll_down_to_row(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        vp.scroll_to(5)
        assert vp.y_offset == 3
        assert vp.view_lines() == ["line3", "line4", "line5"]

    def test_scroll_up_to_row(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        vp.scroll_to(9)
        vp.scroll_to(1)
        assert vp.y_offset == 1

    def test_visible_row_does_not_scroll(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        vp.scroll_to(4)
        vp.scroll_to(3)
        assert vp.y_offset == 2

    def test_offset_clamped_when_content_shrinks(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        vp.scroll_to(9)
        vp.set_content(_lines(4))
        assert vp.y_offset == 1

    def test_offset_never_negative(self) -> None:
        vp = Viewport(20, 5)
        vp.set_content(_lines(2))
        vp.scroll_to(1)
        assert vp.y_offset == 0

    def test_scroll_with_explicit_total(self) -> None:
        vp = Viewport(20, 3)
        vp.scroll_to(8, total=10)
        assert vp.y_offset == 6
        assert list(vp.visible_range(10)) == [6, 7, 8]

    def test_resize_reclamps(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        vp.scroll_to(9)
        vp.set_size(20, 8)
        assert vp.y_offset == 2

    def test_goto_top(self) -> None:
        vp = Viewport(20, 3)
        vp.set_content(_lines(10))
        vp.scroll_to(9)
        vp.goto_top()
        assert vp.view_lines()[0] == "line0"
