"""Executable Textual app that hosts the hex dump viewer."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.message import Message
    from textual.screen import ModalScreen
    from textual.widgets import Footer, Header, Input, Label, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use hexdump_viewer.adapters.textual.app"
    ) from exc

from hexdump_viewer.config import ViewerConfig
from hexdump_viewer.formatter import GlyphRevision
from hexdump_viewer.session import HexViewer, LoadOutcome, LoadTicket
from hexdump_viewer.window import ScrollRange

from .controller import TextualHexAdapter, TextualUIHooks, render_scroll_track

# Round border on the dump view.
_VIEW_CHROME_ROWS = 2


@dataclass
class UIState:
    view_text: str = ""
    status_text: str = ""
    scroll: Optional[ScrollRange] = None


class OpenPathScreen(ModalScreen[Optional[str]]):
    """Prompt for a file path; Escape cancels."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        with Vertical(id="open-dialog"):
            yield Label("Open file")
            yield Input(placeholder="path/to/file.bin", id="open-path")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip() or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ScrollTrack(Static):
    """One-row scrollbar; click or drag to jump within the document."""

    class Seek(Message):
        def __init__(self, fraction: float) -> None:
            super().__init__()
            self.fraction = fraction

    def __init__(self, *, id: Optional[str] = None) -> None:
        super().__init__("", id=id)
        self._dragging = False

    def _seek(self, event: events.MouseEvent) -> None:
        offset = event.get_content_offset(self)
        width = self.content_size.width
        if offset is None or width <= 0:
            return
        self.post_message(self.Seek(offset.x / max(1, width - 1)))

    def on_mouse_down(self, event: events.MouseDown) -> None:
        self._dragging = True
        self.capture_mouse()
        self._seek(event)
        event.stop()

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self._dragging:
            self._seek(event)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self._dragging:
            self._dragging = False
            self.release_mouse()
            event.stop()


class HexViewerApp(App[None]):
    """Minimal Textual UI embedding the hex viewer."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#dump-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
		overflow: hidden;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#scroll-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}

	OpenPathScreen {
		align: center middle;
	}

	#open-dialog {
		width: 60;
		height: auto;
		border: round $accent;
		background: $surface;
		padding: 1 2;
	}
	"""

    BINDINGS = [
        ("ctrl+o", "open", "Open"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        config: Optional[ViewerConfig] = None,
        initial_path: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._config = config or ViewerConfig.from_env()
        self._initial_path = initial_path
        self.viewer: HexViewer | None = None
        self.adapter: TextualHexAdapter | None = None
        self._dump_widget: Static | None = None
        self._status_widget: Static | None = None
        self._scroll_widget: ScrollTrack | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._dump_widget = Static("", id="dump-view")
        yield self._dump_widget
        self._status_widget = Static("", id="status-line")
        self._scroll_widget = ScrollTrack(id="scroll-line")
        yield self._status_widget
        yield self._scroll_widget
        yield Footer()

    def on_mount(self) -> None:
        self.viewer = HexViewer(self._config)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            update_scroll=self._update_scroll,
            log=self.log,
        )
        self.adapter = TextualHexAdapter(self.viewer, hooks)
        self.call_after_refresh(self._sync_viewport)
        if self._initial_path:
            self._open(self._initial_path)

    def on_resize(self, event: events.Resize) -> None:
        del event
        self.call_after_refresh(self._sync_viewport)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+o", "ctrl+q", "ctrl+c"}:
            return
        if isinstance(self.screen, OpenPathScreen):
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result is None:
            return
        event.stop()
        if result.quit:
            self.exit()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("down")
            event.stop()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("up")
            event.stop()

    def on_scroll_track_seek(self, message: ScrollTrack.Seek) -> None:
        if self.adapter:
            self.adapter.seek_fraction(message.fraction)

    def action_open(self) -> None:
        self.push_screen(OpenPathScreen(), self._open)

    def _open(self, path: Optional[str]) -> None:
        if not self.adapter or not self.viewer:
            return
        if not self.viewer.should_background(path):
            self.adapter.open_path(path)
            return
        ticket = self.adapter.begin_load(path)
        self.run_worker(
            lambda: self._format_in_worker(ticket),
            name=f"load-{ticket.generation}",
            group="load",
            thread=True,
        )

    def _format_in_worker(self, ticket: LoadTicket) -> None:
        assert self.viewer is not None
        outcome = self.viewer.prepare(ticket)
        self.call_from_thread(self._finish_load, outcome)

    def _finish_load(self, outcome: LoadOutcome) -> None:
        if self.adapter:
            self.adapter.finish_load(outcome)

    def _sync_viewport(self) -> None:
        if not self.adapter or not self._dump_widget:
            return
        rows = self._dump_widget.size.height - _VIEW_CHROME_ROWS
        self.adapter.resize(max(0, rows))

    def _update_view(self, text: str) -> None:
        self._state.view_text = text
        if self._dump_widget:
            self._dump_widget.update(text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _update_scroll(self, scroll: ScrollRange) -> None:
        self._state.scroll = scroll
        if self._scroll_widget and self.viewer:
            self._scroll_widget.update(
                render_scroll_track(
                    scroll,
                    self.viewer.window.offset,
                    self._scroll_widget.content_size.width,
                )
            )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="View a binary file as a hex dump.")
    parser.add_argument("path", nargs="?", help="File to open on start-up")
    parser.add_argument(
        "--glyphs",
        choices=[revision.value for revision in GlyphRevision],
        default=None,
        help="Glyph column revision (default: HEXDUMP_VIEWER_GLYPHS or 'shaded')",
    )
    parser.add_argument(
        "--no-trailing-line",
        action="store_true",
        help="Drop the blank last line of multiple-of-16 files (layout change)",
    )
    parser.add_argument(
        "--no-label-padding",
        action="store_true",
        help="Write bare row numbers before the tab (lines may differ in width)",
    )
    parser.add_argument(
        "--background-threshold",
        type=int,
        default=None,
        help="Format files of at least this many bytes in a worker thread",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ViewerConfig:
    config = ViewerConfig.from_env()
    if args.glyphs:
        config = replace(config, glyph_revision=GlyphRevision.parse(args.glyphs))
    if args.no_trailing_line:
        config = replace(config, trailing_blank_line=False)
    if args.no_label_padding:
        config = replace(config, pad_labels=False)
    if args.background_threshold is not None:
        config = replace(config, background_threshold=args.background_threshold)
    return config


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = HexViewerApp(config=build_config(args), initial_path=args.path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
