"""Core data models: log levels and lifecycle events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LogLevel(Enum):
    """Severity levels, ordered by ``severity`` rather than declaration order.

    Gaps between severities are reserved for intermediate levels.
    """

    INFO = ("info", 0, "🔍️")
    WARNING = ("warning", 10, "😱")
    ERROR = ("error", 90, "🐞")
    CRASH = ("crash", 99, "💥")

    def __init__(self, label: str, severity: int, emoticon: str) -> None:
        self.label = label
        self.severity = severity
        self.emoticon = emoticon

    def __str__(self) -> str:
        return self.label.upper()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity >= other.severity

    @classmethod
    def parse(cls, name: str) -> LogLevel:
        """Return the level for a case-insensitive name (e.g. ``"warning"``)."""
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError as e:
            valid = ", ".join(level.name for level in cls)
            raise ValueError(f"Unknown log level '{name}'. Valid values: {valid}.") from e


@dataclass(frozen=True, slots=True)
class LogDecoration:
    """Optional decoration applied to lifecycle messages."""

    prefix: str | None = None
    suffix: str | None = None
    uppercase: bool = True


class LogLifecycle(str, Enum):
    """Application lifecycle events shared by the supported platforms."""

    CREATED = "created"
    PAUSED = "paused"
    RESUMED = "resumed"
    FINISHED = "finished"
    DESTROYED = "destroyed"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def format(event: LogLifecycle, decoration: LogDecoration | None = None) -> str:
        """Render a lifecycle event, wrapped by the decoration's prefix and suffix."""
        parts: list[str] = []
        if decoration is not None and decoration.prefix:
            parts.append(decoration.prefix)
        parts.append(event.value)
        if decoration is not None and decoration.suffix:
            parts.append(decoration.suffix)

        text = "".join(parts)
        if decoration is None or decoration.uppercase:
            return text.upper()
        return text
