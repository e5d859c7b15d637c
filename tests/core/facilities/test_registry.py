from __future__ import annotations

import threading

from log_facilities.core.facilities.base import FacilityRegistry, LoggerFacility
from log_facilities.core.messages import LogMessage
from log_facilities.core.models import LogLevel


class Recording(LoggerFacility):
    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.calls: list[tuple[str, ...]] = []

    def is_enabled(self) -> bool:
        return self.enabled

    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        self.calls.append(("message", source, str(level), str(message)))

    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        self.calls.append(("error", source, str(level), str(error)))


def test_first_registration_wins(facility_registry: FacilityRegistry) -> None:
    first, second = Recording(), Recording()

    assert facility_registry.register("rec", first)
    assert not facility_registry.register("rec", second)

    assert facility_registry.get("rec") is first
    assert len(facility_registry) == 1
    assert "rec" in facility_registry


def test_get_with_kind(facility_registry: FacilityRegistry) -> None:
    rec = Recording()
    facility_registry.register("rec", rec)

    assert facility_registry.get("rec", Recording) is rec
    assert facility_registry.get("rec", int) is None
    assert facility_registry.get("missing") is None


def test_deregister_and_clear(facility_registry: FacilityRegistry) -> None:
    facility_registry.register("a", Recording())
    facility_registry.register("b", Recording())

    assert facility_registry.deregister("a")
    assert not facility_registry.deregister("a")
    assert facility_registry.names() == ["b"]

    facility_registry.clear()
    assert len(facility_registry) == 0


def test_enabled_facilities_keep_registration_order(facility_registry: FacilityRegistry) -> None:
    a, off, b = Recording(), Recording(enabled=False), Recording()
    for name, f in (("a", a), ("off", off), ("b", b)):
        facility_registry.register(name, f)

    assert facility_registry.enabled_facilities() == [a, b]
    assert facility_registry.facilities() == [a, off, b]


def test_concurrent_registration_keeps_every_name(facility_registry: FacilityRegistry) -> None:
    def worker(i: int) -> None:
        facility_registry.register(f"f{i}", Recording())

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(32)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(facility_registry.names()) == sorted(f"f{i}" for i in range(32))


def test_log_sends_message_before_error() -> None:
    rec = Recording()
    rec.log("src", LogLevel.ERROR, LogMessage("m"), RuntimeError("e"))
    rec.log("src", LogLevel.INFO)

    assert rec.calls == [("message", "src", "ERROR", "m"), ("error", "src", "ERROR", "e")]
