from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest

from log_facilities.core.facilities import FacilityRegistry
from log_facilities.core.io import FileStoreNotifier
from log_facilities.core.scope import LogScope


class FakeClock:
    """Settable UTC clock for simulating day changes."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class RecordingNotifier(FileStoreNotifier):
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.failures: list[tuple[str, Exception]] = []

    def on_log_file_opened(self, path: str) -> None:
        self.events.append(("opened", path))

    def on_log_file_closed(self, path: str) -> None:
        self.events.append(("closed", path))

    def on_log_folder_invalid(self, path: str) -> None:
        self.events.append(("invalid", path))

    def on_log_write_failed(self, path: str, error: Exception) -> None:
        self.failures.append((path, error))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 12, 30, 8, 0, 0, tzinfo=UTC))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def scope() -> Iterator[LogScope]:
    s = LogScope("test-scope")
    yield s
    s.close(timeout=5.0)


@pytest.fixture
def facility_registry() -> FacilityRegistry:
    return FacilityRegistry()
