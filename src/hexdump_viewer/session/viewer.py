"""Viewer session: command dispatch, file loading and load generations."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from hexdump_viewer.config import ViewerConfig
from hexdump_viewer.formatter import HexDocument, format_bytes
from hexdump_viewer.runtime import telemetry
from hexdump_viewer.window import LineWindow, ScrollRange

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


@dataclass(slots=True)
class ViewerResult:
    """Result returned from ``HexViewer.dispatch``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None
    text: str = ""
    scroll: Optional[ScrollRange] = None
    quit: bool = False


@dataclass(frozen=True, slots=True)
class LoadTicket:
    generation: int
    path: Optional[str]


@dataclass(frozen=True, slots=True)
class LoadOutcome:
    """Formatted document (or read failure) for one load request."""

    ticket: LoadTicket
    document: Optional[HexDocument] = None
    error: Optional[SourceReadError] = None


class HexViewer:
    """Owns the line window and turns host commands into window updates."""

    def __init__(
        self,
        config: Optional[ViewerConfig] = None,
        *,
        window: Optional[LineWindow] = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.window = window or LineWindow(
            visible_line_count=self.config.visible_lines
        )
        self.logger = telemetry.get_logger("hexdump_viewer.session")
        self.closed = False
        self._generation = 0
        self._handlers: Dict[Type[object], Callable[[object], ViewerResult]] = {
            Open: self._handle_open,
            ScrollUp: self._handle_scroll_up,
            ScrollDown: self._handle_scroll_down,
            SetAbsolute: self._handle_set_absolute,
            Resize: self._handle_resize,
            PageUp: self._handle_page_up,
            PageDown: self._handle_page_down,
            Home: self._handle_home,
            End: self._handle_end,
            Quit: self._handle_quit,
        }

    @property
    def document(self) -> HexDocument:
        return self.window.document

    @property
    def generation(self) -> int:
        return self._generation

    def render(self) -> str:
        return self.window.render()

    def scroll_range(self) -> ScrollRange:
        return self.window.scroll_range()

    def dispatch(self, command: Command) -> ViewerResult:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command {command!r}")
        name = type(command).__name__.lower()
        with telemetry.span(
            f"viewer::{name}",
            logger_name="hexdump_viewer.session",
            component="viewer",
            metadata={"offset": self.window.offset},
        ):
            result = handler(command)
        result.text = self.render()
        result.scroll = self.scroll_range()
        return result

    # Loading -----------------------------------------------------------------

    def request_load(self, path: Optional[str]) -> LoadTicket:
        """Start a load; only the most recent ticket may install its result."""

        self._generation += 1
        return LoadTicket(generation=self._generation, path=path or None)

    def prepare(self, ticket: LoadTicket) -> LoadOutcome:
        """Read and format the ticket's file. Safe to run off the UI thread."""

        if ticket.path is None:
            return LoadOutcome(
                ticket=ticket,
                document=HexDocument.placeholder(self.config.no_file_message),
            )
        try:
            data = read_source(ticket.path)
        except SourceReadError as exc:
            return LoadOutcome(ticket=ticket, error=exc)
        document = format_bytes(
            data,
            ticket.path,
            revision=self.config.glyph_revision,
            trailing_blank_line=self.config.trailing_blank_line,
            pad_labels=self.config.pad_labels,
        )
        return LoadOutcome(ticket=ticket, document=document)

    def install(self, outcome: LoadOutcome) -> ViewerResult:
        ticket = outcome.ticket
        if ticket.generation != self._generation:
            telemetry.record_event(
                "load.stale",
                level="debug",
                data={"generation": ticket.generation, "latest": self._generation},
            )
            return ViewerResult(consumed=False, status="stale", message=ticket.path)

        if outcome.error is not None:
            self.logger.error(f"open failed: {outcome.error}")
            telemetry.record_event(
                "open.failed",
                level="warning",
                data={"path": outcome.error.path, "reason": outcome.error.reason},
            )
            return ViewerResult(
                consumed=True, status="open_error", message=outcome.error.reason
            )

        document = outcome.document or HexDocument.placeholder(
            self.config.no_file_message
        )
        self.window.load(document)
        if ticket.path is None:
            telemetry.record_event("open.cancelled")
            return ViewerResult(consumed=True, status="no_file", message=document.name)

        telemetry.record_event(
            "document.loaded",
            data={
                "path": document.name,
                "bytes": document.byte_count,
                "lines": document.line_count,
            },
        )
        return ViewerResult(consumed=True, status="loaded", message=document.name)

    def should_background(self, path: Optional[str]) -> bool:
        """Return ``True`` when ``path`` is large enough to format in a worker."""

        if not path:
            return False
        try:
            return os.path.getsize(path) >= self.config.background_threshold
        except OSError:
            # The synchronous path reports the read failure.
            return False

    # Handlers ----------------------------------------------------------------

    def _handle_open(self, command: Open) -> ViewerResult:
        ticket = self.request_load(command.path)
        return self.install(self.prepare(ticket))

    def _handle_scroll_up(self, command: ScrollUp) -> ViewerResult:
        del command
        self.window.step_up()
        return ViewerResult(consumed=True, status="scroll")

    def _handle_scroll_down(self, command: ScrollDown) -> ViewerResult:
        del command
        self.window.step_down()
        return ViewerResult(consumed=True, status="scroll")

    def _handle_set_absolute(self, command: SetAbsolute) -> ViewerResult:
        self.window.set_absolute(command.position)
        return ViewerResult(consumed=True, status="scroll")

    def _handle_resize(self, command: Resize) -> ViewerResult:
        self.window.resize(command.visible_line_count)
        return ViewerResult(consumed=True, status="resize")

    def _handle_page_up(self, command: PageUp) -> ViewerResult:
        del command
        self.window.page_up()
        return ViewerResult(consumed=True, status="scroll")

    def _handle_page_down(self, command: PageDown) -> ViewerResult:
        del command
        self.window.page_down()
        return ViewerResult(consumed=True, status="scroll")

    def _handle_home(self, command: Home) -> ViewerResult:
        del command
        self.window.home()
        return ViewerResult(consumed=True, status="scroll")

    def _handle_end(self, command: End) -> ViewerResult:
        del command
        self.window.end()
        return ViewerResult(consumed=True, status="scroll")

    def _handle_quit(self, command: Quit) -> ViewerResult:
        del command
        self.closed = True
        telemetry.record_event("viewer.quit")
        return ViewerResult(consumed=True, status="quit", quit=True)


__all__ = ["HexViewer", "LoadOutcome", "LoadTicket", "ViewerResult"]
