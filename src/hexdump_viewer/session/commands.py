"""Closed set of commands a host delivers to the viewer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True, slots=True)
class Open:
    """Open ``path``; ``None`` or ``""`` means the user cancelled the chooser."""

    path: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ScrollUp:
    pass


@dataclass(frozen=True, slots=True)
class ScrollDown:
    pass


@dataclass(frozen=True, slots=True)
class SetAbsolute:
    position: float


@dataclass(frozen=True, slots=True)
class Resize:
    visible_line_count: float


@dataclass(frozen=True, slots=True)
class PageUp:
    pass


@dataclass(frozen=True, slots=True)
class PageDown:
    pass


@dataclass(frozen=True, slots=True)
class Home:
    pass


@dataclass(frozen=True, slots=True)
class End:
    pass


@dataclass(frozen=True, slots=True)
class Quit:
    pass


Command = Union[
    Open,
    ScrollUp,
    ScrollDown,
    SetAbsolute,
    Resize,
    PageUp,
    PageDown,
    Home,
    End,
    Quit,
]

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
]
