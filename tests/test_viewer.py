from __future__ import annotations

import math
from pathlib import Path

import pytest

from hexdump_viewer.config import ViewerConfig
from hexdump_viewer.formatter import NO_FILE_MESSAGE
from hexdump_viewer.session import (
    End,
    HexViewer,
    Home,
    Open,
    PageDown,
    Quit,
    Resize,
    ScrollDown,
    ScrollUp,
    SetAbsolute,
    SourceReadError,
    read_source,
)
from hexdump_viewer.window import WindowState


def make_file(tmp_path: Path, size: int, name: str = "data.bin") -> Path:
    path = tmp_path / name
    path.write_bytes(bytes(index % 256 for index in range(size)))
    return path


def make_viewer(**overrides: object) -> HexViewer:
    config = ViewerConfig(visible_lines=4, **overrides)  # type: ignore[arg-type]
    return HexViewer(config)


def test_open_formats_file_and_resets_offset(tmp_path: Path) -> None:
    viewer = make_viewer()
    path = make_file(tmp_path, 160)
    viewer.dispatch(Open(str(make_file(tmp_path, 64, "other.bin"))))
    viewer.dispatch(SetAbsolute(3))

    result = viewer.dispatch(Open(str(path)))

    assert result.status == "loaded"
    assert result.message == str(path)
    assert viewer.window.offset == 0
    assert viewer.document.line_count == 11
    assert viewer.window.state is WindowState.LOADED
    assert len(result.text.split("\n")) == 4
    assert result.scroll is not None
    assert result.scroll.maximum == 10


@pytest.mark.parametrize("path", [None, ""])
def test_cancelled_open_shows_sentinel_document(path: str | None) -> None:
    viewer = make_viewer()

    result = viewer.dispatch(Open(path))

    assert result.status == "no_file"
    assert viewer.document.lines == (NO_FILE_MESSAGE,)
    assert viewer.document.name == NO_FILE_MESSAGE
    assert result.text == NO_FILE_MESSAGE


def test_missing_file_keeps_current_document(tmp_path: Path) -> None:
    viewer = make_viewer()
    viewer.dispatch(Open(str(make_file(tmp_path, 48))))
    before = viewer.document

    result = viewer.dispatch(Open(str(tmp_path / "missing.bin")))

    assert result.status == "open_error"
    assert result.consumed is True
    assert result.message
    assert viewer.document is before


def test_read_source_wraps_os_errors(tmp_path: Path) -> None:
    with pytest.raises(SourceReadError) as info:
        read_source(tmp_path / "nope.bin")

    assert info.value.path.endswith("nope.bin")
    assert isinstance(info.value.__cause__, OSError)


def test_scroll_commands_clamp(tmp_path: Path) -> None:
    viewer = make_viewer()
    viewer.dispatch(Open(str(make_file(tmp_path, 48))))

    viewer.dispatch(ScrollUp())
    assert viewer.window.offset == 0
    for _ in range(10):
        viewer.dispatch(ScrollDown())
    assert viewer.window.offset == 2
    viewer.dispatch(SetAbsolute(1e9))
    assert viewer.window.offset == 3
    viewer.dispatch(Home())
    assert viewer.window.offset == 0
    viewer.dispatch(End())
    assert viewer.window.offset == 3


def test_resize_changes_rendered_height(tmp_path: Path) -> None:
    viewer = make_viewer()
    viewer.dispatch(Open(str(make_file(tmp_path, 320))))

    result = viewer.dispatch(Resize(7))
    assert len(result.text.split("\n")) == 7

    result = viewer.dispatch(PageDown())
    assert viewer.window.offset == 7
    assert result.text.split("\n")[0].startswith("8 ")


@pytest.mark.parametrize("height, expected_lines", [(math.inf, 21), (math.nan, 0)])
def test_resize_with_non_finite_height(
    tmp_path: Path, height: float, expected_lines: int
) -> None:
    viewer = make_viewer()
    viewer.dispatch(Open(str(make_file(tmp_path, 320))))

    result = viewer.dispatch(Resize(height))

    assert result.status == "resize"
    assert len(result.text.split("\n") if result.text else []) == expected_lines
    assert result.scroll is not None
    assert result.scroll.handle_fraction <= 1.0


def test_only_latest_load_is_installed(tmp_path: Path) -> None:
    viewer = make_viewer()
    first = viewer.request_load(str(make_file(tmp_path, 16, "first.bin")))
    second = viewer.request_load(str(make_file(tmp_path, 32, "second.bin")))

    first_outcome = viewer.prepare(first)
    second_outcome = viewer.prepare(second)

    assert viewer.install(second_outcome).status == "loaded"
    stale = viewer.install(first_outcome)
    assert stale.status == "stale"
    assert stale.consumed is False
    assert viewer.document.name.endswith("second.bin")


def test_prepare_honours_config(tmp_path: Path) -> None:
    viewer = make_viewer(trailing_blank_line=False, glyph_revision="legacy")
    path = make_file(tmp_path, 32)

    outcome = viewer.prepare(viewer.request_load(str(path)))

    assert outcome.document is not None
    assert outcome.document.line_count == 2
    assert outcome.document.lines[0].endswith("|  " + "." * 16 + "  |")


def test_prepare_can_skip_label_padding(tmp_path: Path) -> None:
    viewer = make_viewer(pad_labels=False)
    path = make_file(tmp_path, 160)

    outcome = viewer.prepare(viewer.request_load(str(path)))

    assert outcome.document is not None
    assert outcome.document.lines[0].startswith("1\t|")
    assert outcome.document.lines[10].startswith("11\t|")


def test_should_background_uses_threshold(tmp_path: Path) -> None:
    viewer = make_viewer(background_threshold=100)

    assert viewer.should_background(str(make_file(tmp_path, 100))) is True
    assert viewer.should_background(str(make_file(tmp_path, 99, "s.bin"))) is False
    assert viewer.should_background(str(tmp_path / "missing.bin")) is False
    assert viewer.should_background(None) is False


def test_quit_marks_viewer_closed() -> None:
    viewer = make_viewer()

    result = viewer.dispatch(Quit())

    assert result.quit is True
    assert viewer.closed is True


def test_unknown_command_is_rejected() -> None:
    viewer = make_viewer()

    with pytest.raises(TypeError):
        viewer.dispatch("down")  # type: ignore[arg-type]
