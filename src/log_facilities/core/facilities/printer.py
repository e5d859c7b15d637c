"""Console facility."""

from __future__ import annotations

import logging
import sys
from typing import Protocol, TextIO

from ..messages import LogMessage, format_error, format_message
from ..models import LogLevel
from .base import LoggerFacility

_LOGGING_LEVELS: dict[LogLevel, int] = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRASH: logging.CRITICAL,
}


class Printer(Protocol):
    """Writes one formatted line to the system console or log."""

    def print(self, source: str, level: LogLevel, message: str) -> None: ...


class LoggingPrinter:
    """Forward lines to the stdlib logger named after the source."""

    def print(self, source: str, level: LogLevel, message: str) -> None:
        logging.getLogger(source).log(_LOGGING_LEVELS[level], message)

    def __repr__(self) -> str:
        return "LoggingPrinter()"


class StreamPrinter:
    """Write ``<source>: <line>`` to a text stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def print(self, source: str, level: LogLevel, message: str) -> None:
        stream = self._stream or sys.stdout
        stream.write(f"{source}: {message}\n")
        stream.flush()

    def __repr__(self) -> str:
        return "StreamPrinter()"


class PrinterLoggerFacility(LoggerFacility):
    """Prints every accepted event synchronously through a :class:`Printer`."""

    def __init__(self, printer: Printer | None = None, minimum_level: LogLevel = LogLevel.INFO) -> None:
        self.printer: Printer = printer if printer is not None else LoggingPrinter()
        self.minimum_level = minimum_level

    def __repr__(self) -> str:
        return f"PrinterLoggerFacility({self.printer!r})"

    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        if level.severity >= self.minimum_level.severity:
            self.printer.print(source, level, format_message(level, message))

    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        if level.severity >= self.minimum_level.severity:
            self.printer.print(source, level, format_error(level, error).rstrip())
