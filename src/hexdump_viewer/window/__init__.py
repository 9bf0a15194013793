"""Viewport and scroll state for formatted documents."""

from .line_window import (
    LineWindow,
    ScrollRange,
    ViewportState,
    WindowState,
    to_line_index,
)

__all__ = [
    "LineWindow",
    "ScrollRange",
    "ViewportState",
    "WindowState",
    "to_line_index",
]
