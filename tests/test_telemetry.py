from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from hexdump_viewer.formatter import FORMATTER_LOGGER, format_bytes
from hexdump_viewer.runtime import telemetry


class FakeLogger:
    def __init__(self) -> None:
        self.context: Dict[str, str] = {}
        self.records: List[Tuple[str, str, Any]] = []
        self.profiled: List[str] = []
        self.components: List[str] = []
        self.profile_context: List[Dict[str, str]] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        self.profile_context.append(dict(self.context))
        yield

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    def info_with(self, message: str, pairs: Any) -> None:
        self.records.append(("info", message, dict(pairs)))

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, dict(pairs)))

    def warning(self, message: str) -> None:
        self.records.append(("warning", message, None))


@pytest.fixture()
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    fake = FakeLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, "test.fake", fake)
    return fake


def test_span_tracks_component_and_clears_context(fake_logger: FakeLogger) -> None:
    with telemetry.span(
        "formatter::format",
        logger_name="test.fake",
        component="formatter",
        metadata={"bytes": 32},
    ) as handle:
        assert fake_logger.context == {"bytes": "32"}
        assert handle.metadata == {"bytes": "32"}

    assert fake_logger.context == {}
    assert fake_logger.profiled == ["formatter::format"]
    assert fake_logger.components == ["formatter"]


def test_span_reports_failures(fake_logger: FakeLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("viewer::open", logger_name="test.fake", component=True):
            raise RuntimeError("boom")

    level, message, payload = fake_logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert payload["reason"] == "boom"
    assert payload["component"] == "viewer::open"


def test_record_event_prefers_structured_methods(fake_logger: FakeLogger) -> None:
    telemetry.record_event(
        "document.loaded", data={"lines": 3}, logger_name="test.fake"
    )
    telemetry.record_event("open.failed", level="warning", logger_name="test.fake")

    assert fake_logger.records[0] == (
        "info",
        "event::document.loaded",
        {"event": "document.loaded", "lines": "3"},
    )
    assert fake_logger.records[1][0] == "warning"
    assert fake_logger.records[1][1].startswith("event::open.failed")


def test_record_event_rejects_unknown_levels(fake_logger: FakeLogger) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("x", level="shout", logger_name="test.fake")


def test_configure_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_formatting_uses_its_own_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    formatter_log = FakeLogger()
    shared_log = FakeLogger()
    monkeypatch.setitem(telemetry._LOGGER_CACHE, FORMATTER_LOGGER, formatter_log)
    monkeypatch.setitem(
        telemetry._LOGGER_CACHE, telemetry.DEFAULT_LOGGER_NAME, shared_log
    )

    format_bytes(b"abc")

    assert formatter_log.profiled == ["formatter::format"]
    assert formatter_log.profile_context == [{"bytes": "3", "lines": "1"}]
    assert formatter_log.context == {}
    assert shared_log.profiled == []
    assert shared_log.profile_context == []
