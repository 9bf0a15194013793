"""Minimal Textual adapter that wires HexViewer results into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from hexdump_viewer.formatter.glyphs import FULL_BLOCK, LIGHT_SHADE
from hexdump_viewer.session import (
    Command,
    End,
    HexViewer,
    Home,
    LoadOutcome,
    LoadTicket,
    Open,
    PageDown,
    PageUp,
    Quit,
    Resize,
    ScrollDown,
    ScrollUp,
    SetAbsolute,
    ViewerResult,
)
from hexdump_viewer.window import ScrollRange


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


KEY_COMMANDS: Dict[str, Callable[[], Command]] = {
    "up": ScrollUp,
    "k": ScrollUp,
    "down": ScrollDown,
    "j": ScrollDown,
    "pageup": PageUp,
    "pagedown": PageDown,
    "home": Home,
    "g": Home,
    "end": End,
    "G": End,
    "q": Quit,
}


def render_scroll_track(scroll: ScrollRange, offset: int, width: int) -> str:
    """Draw a one-row scrollbar: shaded track with a solid handle."""

    if width <= 0:
        return ""
    handle = max(1, min(width, round(scroll.handle_fraction * width)))
    travel = width - handle
    start = round(offset / scroll.maximum * travel) if scroll.maximum else 0
    start = max(0, min(start, travel))
    return (
        LIGHT_SHADE * start
        + FULL_BLOCK * handle
        + LIGHT_SHADE * (width - start - handle)
    )


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    update_scroll: Callable[[ScrollRange], None] = _noop
    log: Callable[[str], None] = _noop


class TextualHexAdapter:
    """Bridges host key/resize/open events to a Textual-friendly surface."""

    def __init__(self, viewer: HexViewer, hooks: TextualUIHooks) -> None:
        self.viewer = viewer
        self.hooks = hooks
        self._refresh_view()

    def handle_textual_key(
        self, key: str, *, text: Optional[str] = None
    ) -> Optional[ViewerResult]:
        """Translate a Textual key name into a viewer command and dispatch it."""

        factory = KEY_COMMANDS.get(key) or (KEY_COMMANDS.get(text) if text else None)
        if factory is None:
            self._log_state("key miss", key=key, text=text)
            return None
        return self.dispatch(factory())

    def dispatch(self, command: Command) -> ViewerResult:
        self._log_state("command ->", command=command)
        result = self.viewer.dispatch(command)
        self._after_result(result)
        self._log_state("result <-", status=result.status, message=result.message)
        return result

    def open_path(self, path: Optional[str]) -> ViewerResult:
        return self.dispatch(Open(path))

    def resize(self, visible_line_count: int) -> ViewerResult:
        return self.dispatch(Resize(visible_line_count))

    def set_absolute(self, position: float) -> ViewerResult:
        return self.dispatch(SetAbsolute(position))

    def seek_fraction(self, fraction: float) -> ViewerResult:
        """Jump to ``fraction`` (0.0 top, 1.0 bottom) of the scroll range."""

        return self.set_absolute(fraction * self.viewer.scroll_range().maximum)

    def begin_load(self, path: Optional[str]) -> LoadTicket:
        """Reserve a load generation for a worker that formats ``path``."""

        ticket = self.viewer.request_load(path)
        self.hooks.update_status(f"loading {path} ...")
        self._log_state("load ->", generation=ticket.generation, path=path)
        return ticket

    def finish_load(self, outcome: LoadOutcome) -> ViewerResult:
        result = self.viewer.install(outcome)
        self._log_state(
            "load <-", generation=outcome.ticket.generation, status=result.status
        )
        if result.status != "stale":
            self._after_result(result)
        return result

    def status_line(self) -> str:
        window = self.viewer.window
        document = window.document
        return (
            f"{document.name}  "
            f"line {window.offset + 1}/{document.line_count}  "
            f"{document.byte_count} bytes"
        )

    def _after_result(self, result: ViewerResult) -> None:
        if result.status in {"open_error", "no_file"} and result.message:
            self.hooks.update_status(f"{result.status}: {result.message}")
        else:
            self.hooks.update_status(self.status_line())
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.viewer.render())
        self.hooks.update_scroll(self.viewer.scroll_range())

    def _log_state(self, prefix: str, **fields: object) -> None:
        window = self.viewer.window
        snapshot: Dict[str, object] = {
            "document": window.document.name,
            "offset": window.offset,
            "visible": window.viewport.visible_line_count,
            "generation": self.viewer.generation,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))


__all__ = [
    "KEY_COMMANDS",
    "TextualHexAdapter",
    "TextualUIHooks",
    "render_scroll_track",
]
