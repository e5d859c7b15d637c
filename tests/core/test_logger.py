from __future__ import annotations

import json

import pytest

from log_facilities.core.facilities import FacilityRegistry, FileLoggerFacility, JsonLoggerFacility, LoggerFacility
from log_facilities.core.logger import Logger
from log_facilities.core.messages import LogMessage
from log_facilities.core.models import LogDecoration, LogLevel, LogLifecycle
from log_facilities.core.scope import LogScope


class Recording(LoggerFacility):
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        self.calls.append((source, str(level), str(message)))

    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        self.calls.append((source, str(level), repr(error)))


class Broken(LoggerFacility):
    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        raise RuntimeError("facility down")

    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        raise RuntimeError("facility down")


@pytest.fixture
def recording(facility_registry: FacilityRegistry) -> Recording:
    rec = Recording()
    facility_registry.register("recording", rec)
    return rec


def test_levels_and_arguments_reach_facilities(scope: LogScope, facility_registry, recording) -> None:
    log = Logger("Bootstrap", scope=scope, registry=facility_registry)

    log.info("boot", {"version": "1.2"})
    scope.flush(timeout=5.0)
    log.warning("slow", source="Network")
    scope.flush(timeout=5.0)
    log.crash(error=ValueError("x"))
    scope.flush(timeout=5.0)

    assert recording.calls == [
        ("Bootstrap", "INFO", 'boot [version="1.2"]'),
        ("Network", "WARNING", "slow"),
        ("Bootstrap", "CRASH", "ValueError('x')"),
    ]


def test_empty_call_is_dropped(scope: LogScope, facility_registry, recording) -> None:
    log = Logger("app", scope=scope, registry=facility_registry)

    log.error()
    log.log(LogLevel.INFO, None, {"ignored": 1})
    scope.flush(timeout=5.0)

    assert recording.calls == []


def test_failing_facility_does_not_stop_the_others(
    scope: LogScope, facility_registry: FacilityRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    facility_registry.register("broken", Broken())
    rec = Recording()
    facility_registry.register("recording", rec)

    Logger("app", scope=scope, registry=facility_registry).error("still logged")
    scope.flush(timeout=5.0)

    assert rec.calls == [("app", "ERROR", "still logged")]
    assert "failed to log" in caplog.text


def test_lifecycle_uses_the_decoration(scope: LogScope, facility_registry, recording) -> None:
    log = Logger("screen", LogDecoration(prefix="main "), scope=scope, registry=facility_registry)

    log.lifecycle(LogLifecycle.CREATED)
    scope.flush(timeout=5.0)

    assert recording.calls == [("screen", "INFO", "MAIN CREATED")]


def test_logs_reach_text_and_json_files(tmp_path, clock, scope: LogScope, facility_registry) -> None:
    folder = str(tmp_path / "logs")
    facility_registry.register("text", FileLoggerFacility(folder, LogLevel.INFO, scope=scope, clock=clock))
    facility_registry.register("json", JsonLoggerFacility(folder, LogLevel.WARNING, scope=scope, clock=clock))
    log = Logger("test", scope=scope, registry=facility_registry)

    log.info("boot")
    assert scope.flush(timeout=5.0)
    log.error("fail", error=RuntimeError("x"))
    assert scope.flush(timeout=5.0)

    lines = (tmp_path / "logs" / "2025-12-30.log").read_text(encoding="utf-8").splitlines()
    assert lines == [
        "[2025-12-30 08:00:00]: 🔍️ INFO: boot",
        "[2025-12-30 08:00:00]: 🐞 ERROR: fail RuntimeError: x",
    ]

    records = json.loads((tmp_path / "logs" / "2025-12-30.json").read_text(encoding="utf-8"))
    assert [(r["level"], r.get("message"), r.get("error")) for r in records] == [
        ("ERROR", "fail", None),
        ("ERROR", None, "RuntimeError: x\n"),
    ]


def test_entries_keep_call_order_without_flushing(tmp_path, clock, scope: LogScope, facility_registry) -> None:
    folder = str(tmp_path / "logs")
    facility_registry.register("text", FileLoggerFacility(folder, LogLevel.INFO, scope=scope, clock=clock))
    facility_registry.register("json", JsonLoggerFacility(folder, LogLevel.INFO, scope=scope, clock=clock))
    log = Logger("test", scope=scope, registry=facility_registry)
    expected = [f"m{i}" for i in range(200)]

    for text in expected:
        log.info(text)
    assert scope.flush(timeout=30.0)

    lines = (tmp_path / "logs" / "2025-12-30.log").read_text(encoding="utf-8").splitlines()
    assert [line.rsplit(" ", 1)[-1] for line in lines] == expected

    records = json.loads((tmp_path / "logs" / "2025-12-30.json").read_text(encoding="utf-8"))
    assert [r["message"] for r in records] == expected
