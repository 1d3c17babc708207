"""Shared fixtures: a small deterministic pygments style and a plain caret."""

from __future__ import annotations

import pytest
from pygments.style import Style
from pygments.token import Keyword, Name, String

from bubble.texteditor.theme import StyleEntry, StyleTable


class SampleStyle(Style):
    """Keyword bold blue, names green, strings on a dark background."""

    name = "sample"
    background_color = "#ffffff"
    styles = {
        Keyword: "bold #0000ff",
        Name: "#00aa00",
        String: "bg:#ffffff #aa0000",
        String.Double: "bg:#123456",
    }


@pytest.fixture
def sample_styles() -> StyleTable:
    return StyleTable(SampleStyle)


@pytest.fixture
def caret() -> StyleEntry:
    return StyleEntry(bold=True, background="cd0000")
