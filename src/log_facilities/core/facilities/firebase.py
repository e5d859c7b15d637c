"""Remote (Firebase-style) facility.

The transport belongs to the host application: it supplies a
:class:`FirebaseSink`, typically a thin wrapper over its crash-reporting SDK.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from ..messages import LogMessage, format_message
from ..models import LogLevel
from .base import LoggerFacility


class FirebaseSink(Protocol):
    def log_message(self, source: str, level: LogLevel, message: str, properties: Mapping[str, Any]) -> None: ...

    def log_error(
        self, source: str, level: LogLevel, error: BaseException, properties: Mapping[str, Any]
    ) -> None: ...

    def set_user_id(self, user_id: str) -> None: ...

    def clear_user_id(self) -> None: ...


class FirebaseLoggerFacility(LoggerFacility):
    """Sends accepted events to a sink along with the current default properties.

    Properties are global: once added they accompany every later event until
    removed.
    """

    def __init__(self, sink: FirebaseSink, minimum_level: LogLevel = LogLevel.WARNING) -> None:
        self.sink = sink
        self.minimum_level = minimum_level
        self._lock = threading.Lock()
        self._properties: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"FirebaseLoggerFacility({self.sink!r})"

    @property
    def properties(self) -> dict[str, Any]:
        """A snapshot of the current default properties."""
        with self._lock:
            return dict(self._properties)

    def set_user_id(self, user_id: str | None) -> None:
        """Set the user identity; None or blank clears it."""
        normalized = user_id.strip() if user_id is not None else ""
        if normalized:
            self.sink.set_user_id(normalized)
        else:
            self.sink.clear_user_id()

    def add_properties(self, properties: Mapping[str, Any]) -> None:
        with self._lock:
            self._properties.update(properties)

    def remove_properties(self, keys: Iterable[str]) -> None:
        with self._lock:
            for key in keys:
                self._properties.pop(key, None)

    def clear_properties(self) -> None:
        with self._lock:
            self._properties.clear()

    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        if level.severity >= self.minimum_level.severity:
            self.sink.log_message(source, level, format_message(level, message), self.properties)

    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        if level.severity >= self.minimum_level.severity:
            self.sink.log_error(source, level, error, self.properties)
