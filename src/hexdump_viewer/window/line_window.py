"""Line-windowed viewport over a formatted hex document."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hexdump_viewer.formatter import HexDocument


class WindowState(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"


@dataclass(slots=True)
class ViewportState:
    """First visible line plus the viewport height in lines."""

    first_visible_line: int = 0
    visible_line_count: int = 0


@dataclass(frozen=True, slots=True)
class ScrollRange:
    """Bounds and handle size for an external scrollbar widget."""

    minimum: int
    maximum: int
    handle_fraction: float


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))


def to_line_index(position: float | int) -> int:
    """Truncate a position or line count toward zero; NaN maps to 0."""

    if isinstance(position, float) and not math.isfinite(position):
        if math.isnan(position):
            return 0
        return sys.maxsize if position > 0 else -sys.maxsize
    return int(position)


class LineWindow:
    """Owns the formatted document and the scroll offset.

    All clamping happens here; callers may pass any requested offset or
    count and never index outside the document.
    """

    def __init__(
        self,
        document: Optional[HexDocument] = None,
        *,
        visible_line_count: float | int = 0,
    ) -> None:
        self._document = document or HexDocument()
        self._state = WindowState.LOADED if document else WindowState.EMPTY
        self.viewport = ViewportState()
        self.resize(visible_line_count)

    @property
    def document(self) -> HexDocument:
        return self._document

    @property
    def state(self) -> WindowState:
        return self._state

    @property
    def offset(self) -> int:
        return self.viewport.first_visible_line

    @property
    def document_length(self) -> int:
        return self._document.line_count

    @property
    def last_line_index(self) -> int:
        return self._document.last_line_index

    def load(self, document: HexDocument) -> None:
        # Single reference swap: readers see either the old or the new document.
        self._document = document
        self.viewport.first_visible_line = 0
        self._state = WindowState.LOADED

    def resize(self, visible_line_count: float | int) -> None:
        self.viewport.visible_line_count = max(0, to_line_index(visible_line_count))

    def visible_slice(
        self, requested_first: float | int, visible_line_count: float | int
    ) -> str:
        """Join the lines starting at ``requested_first`` without mutating state."""

        document = self._document
        first = _clamp(to_line_index(requested_first), 0, document.last_line_index)
        count = _clamp(
            to_line_index(visible_line_count), 0, document.line_count - first
        )
        return "\n".join(document.lines[first : first + count])

    def render(self) -> str:
        return self.visible_slice(self.offset, self.viewport.visible_line_count)

    def step_down(self) -> int:
        # Never advances past document_length - 2.
        if self.offset < self.document_length - 2:
            self.viewport.first_visible_line = self.offset + 1
        return self.offset

    def step_up(self) -> int:
        self.viewport.first_visible_line = max(0, self.offset - 1)
        return self.offset

    def set_absolute(self, position: float | int) -> int:
        self.viewport.first_visible_line = _clamp(
            to_line_index(position), 0, self.last_line_index
        )
        return self.offset

    def page_down(self) -> int:
        return self.set_absolute(self.offset + max(1, self.viewport.visible_line_count))

    def page_up(self) -> int:
        return self.set_absolute(self.offset - max(1, self.viewport.visible_line_count))

    def home(self) -> int:
        return self.set_absolute(0)

    def end(self) -> int:
        return self.set_absolute(self.last_line_index)

    def scroll_range(self) -> ScrollRange:
        length = self.document_length
        fraction = self.viewport.visible_line_count / length if length else 1.0
        return ScrollRange(
            minimum=0,
            maximum=self.last_line_index,
            handle_fraction=min(1.0, fraction),
        )


__all__ = [
    "LineWindow",
    "ScrollRange",
    "ViewportState",
    "WindowState",
    "to_line_index",
]
