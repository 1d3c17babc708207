"""Text editor components."""

from bubble.texteditor.components.selector import IntellisenseItem, Selector
from bubble.texteditor.components.textarea import (
    IntellisenseHook,
    TextArea,
    TextAreaOptions,
)
from bubble.texteditor.components.viewport import Viewport

__all__ = [
    "IntellisenseHook",
    "IntellisenseItem",
    "Selector",
    "TextArea",
    "TextAreaOptions",
    "Viewport",
]
