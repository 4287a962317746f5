from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from editor_history.editor import EditorSession
from editor_history.history import EditorSnapshot, SnapshotHistory
from editor_history.runtime import telemetry

Event = Tuple[str, str, Dict[str, Any]]


class RecordingLogger:
    def __init__(self) -> None:
        self.lines: List[Tuple[str, str, Dict[str, str]]] = []
        self.context: Dict[str, str] = {}

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        yield

    def info_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.lines.append(("info", message, dict(pairs)))

    def debug_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.lines.append(("debug", message, dict(pairs)))

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.lines.append(("error", message, dict(pairs)))


class RecordingConfig:
    def __init__(self) -> None:
        self.profiling = False

    def with_profiling(self, enabled: bool) -> None:
        self.profiling = enabled


def capture_events(monkeypatch: pytest.MonkeyPatch) -> List[Event]:
    events: List[Event] = []

    def record(name: str, *, level: str = "info", data=None, logger_name=None) -> None:
        events.append((name, level, dict(data or {})))

    monkeypatch.setattr(telemetry, "record_event", record)
    return events


def make_history(count: int, max_entries: int | None = None) -> SnapshotHistory:
    history = SnapshotHistory(max_entries)
    for index in range(count):
        history.save(EditorSnapshot(f"s{index}", index, False))
    return history


def test_save_after_undo_reports_truncation(monkeypatch: pytest.MonkeyPatch) -> None:
    history = make_history(4)
    events = capture_events(monkeypatch)
    history.undo()
    history.undo()

    history.save(EditorSnapshot("branch", 0, True))

    names = [name for name, _, _ in events]
    assert names == ["history.undo", "history.undo", "history.truncate", "history.save"]
    truncate = events[2][2]
    assert truncate["dropped"] == 2
    assert truncate["cursor"] == 1
    assert events[3][2] == {"cursor": 2, "length": 3}


def test_save_at_newest_does_not_truncate(monkeypatch: pytest.MonkeyPatch) -> None:
    history = make_history(2)
    events = capture_events(monkeypatch)

    history.save(EditorSnapshot("s2", 2, False))

    assert [name for name, _, _ in events] == ["history.save"]


def test_eviction_event_counts_dropped_entries(monkeypatch: pytest.MonkeyPatch) -> None:
    history = make_history(2, max_entries=2)
    events = capture_events(monkeypatch)

    history.save(EditorSnapshot("s2", 2, False))

    assert [name for name, _, _ in events] == ["history.evict", "history.save"]
    assert events[0][2]["evicted"] == 1
    assert events[1][2] == {"cursor": 1, "length": 2}


def test_boundary_navigation_logs_debug_noops(monkeypatch: pytest.MonkeyPatch) -> None:
    history = make_history(1)
    events = capture_events(monkeypatch)

    history.undo()
    history.redo()

    assert events == [
        ("history.undo.noop", "debug", {"cursor": 0, "length": 1}),
        ("history.redo.noop", "debug", {"cursor": 0, "length": 1}),
    ]


def test_failed_transaction_logs_span_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    session = EditorSession(EditorSnapshot.initial("a"))

    with pytest.raises(RuntimeError):
        with session.transaction("broken"):
            session.stage(content="half done")
            raise RuntimeError("boom")

    failures = [line for line in logger.lines if line[1] == "span::fail"]
    assert failures == [
        (
            "error",
            "span::fail",
            {"span": "session::broken", "session": "default", "reason": "boom"},
        )
    ]
    assert logger.context == {}


def test_record_event_writes_structured_pairs(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)

    telemetry.record_event("history.save", level="debug", data={"cursor": 3})

    assert logger.lines == [
        ("debug", "event::history.save", {"event": "history.save", "cursor": "3"})
    ]


def test_explicit_config_gets_profiling() -> None:
    config = RecordingConfig()
    try:
        telemetry.configure(config=config)
        assert config.profiling is True
    finally:
        telemetry.configure()


def test_loggers_are_cached() -> None:
    assert telemetry.get_logger("editor_history.tests") is telemetry.get_logger(
        "editor_history.tests"
    )
