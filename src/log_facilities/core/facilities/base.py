"""Facility contract and the process-wide facility registry."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import TypeVar

from ..messages import LogMessage
from ..models import LogLevel

F = TypeVar("F", bound="LoggerFacility")


class LoggerFacility(ABC):
    """A pluggable log sink.

    For example, a development build would register a printer facility that
    writes everything to the console, while a production build would rather
    register file facilities or a remote sink.
    """

    def is_enabled(self) -> bool:
        """Whether this facility currently accepts log events."""
        return True

    @abstractmethod
    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        """Log a message."""

    @abstractmethod
    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        """Log an error."""

    def log(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None = None,
        error: BaseException | None = None,
    ) -> None:
        """Log a message and/or an error; with both, the message goes first."""
        if message is not None:
            self.log_message(source, level, message)
        if error is not None:
            self.log_error(source, level, error)


class FacilityRegistry:
    """Ordered name -> facility mapping with copy-on-write updates.

    Registering an existing name is a no-op: the first registration wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._facilities: Mapping[str, LoggerFacility] = MappingProxyType({})

    def register(self, name: str, facility: LoggerFacility) -> bool:
        """Add ``facility`` under ``name``; returns False if the name is taken."""
        with self._lock:
            if name in self._facilities:
                return False
            updated = dict(self._facilities)
            updated[name] = facility
            self._facilities = MappingProxyType(updated)
            return True

    def deregister(self, name: str) -> bool:
        """Remove the facility named ``name``; returns False if there was none."""
        with self._lock:
            if name not in self._facilities:
                return False
            updated = dict(self._facilities)
            del updated[name]
            self._facilities = MappingProxyType(updated)
            return True

    def get(self, name: str, kind: type[F] | None = None) -> F | LoggerFacility | None:
        """Return the facility named ``name``, or None (also when not a ``kind``)."""
        facility = self._facilities.get(name)
        if facility is None or (kind is not None and not isinstance(facility, kind)):
            return None
        return facility

    def clear(self) -> None:
        with self._lock:
            self._facilities = MappingProxyType({})

    def names(self) -> list[str]:
        return list(self._facilities)

    def facilities(self) -> list[LoggerFacility]:
        return list(self._facilities.values())

    def enabled_facilities(self) -> list[LoggerFacility]:
        return [f for f in self._facilities.values() if f.is_enabled()]

    def __contains__(self, name: object) -> bool:
        return name in self._facilities

    def __len__(self) -> int:
        return len(self._facilities)


registry = FacilityRegistry()
