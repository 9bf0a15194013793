"""Viewer session: commands, file loading and dispatch."""

from .commands import (
    Command,
    End,
    Home,
    Open,
    PageDown,
    PageUp,
    Quit,
    Resize,
    ScrollDown,
    ScrollUp,
    SetAbsolute,
)
from .loader import SourceReadError, read_source
from .viewer import HexViewer, LoadOutcome, LoadTicket, ViewerResult

__all__ = [
    "Command",
    "End",
    "Home",
    "Open",
    "PageDown",
    "PageUp",
    "Quit",
    "Resize",
    "ScrollDown",
    "ScrollUp",
    "SetAbsolute",
    "SourceReadError",
    "read_source",
    "HexViewer",
    "LoadOutcome",
    "LoadTicket",
    "ViewerResult",
]
