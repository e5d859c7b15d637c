"""Log messages, their arguments and textual rendering."""

from __future__ import annotations

import traceback
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .models import LogLevel

NULL_TEXT = "(null)"


def format_value(value: Any) -> str:
    """Return a debug-style rendering of an argument value.

    Containers are rendered recursively: mappings as ``{k: v}``, lists and
    tuples as ``List(a, b)``, sets as ``Set(a, b)``, other iterables as
    ``Iterable(...)``. Strings are quoted and ``None`` becomes ``(null)``.
    """
    if value is None:
        return NULL_TEXT
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bytes | bytearray):
        return str(value)
    if isinstance(value, Mapping):
        inner = ", ".join(f"{k}: {format_value(v)}" for k, v in value.items())
        return "{" + inner + "}"
    if isinstance(value, list | tuple):
        return _format_items("List", value)
    if isinstance(value, set | frozenset):
        return _format_items("Set", value)
    if isinstance(value, Iterable):
        return _format_items("Iterable", value)
    return str(value)


def _format_items(kind: str, items: Iterable[Any]) -> str:
    return f"{kind}(" + ", ".join(format_value(v) for v in items) + ")"


def normalize_label(label: str) -> str:
    """Lowercase a label and turn dashes into underscores."""
    return label.strip().lower().replace("-", "_")


@dataclass(frozen=True, slots=True)
class LogArg:
    """A labelled value attached to a log message."""

    label: str
    value: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "label", normalize_label(self.label))

    def __str__(self) -> str:
        return f"[{self.label}={format_value(self.value)}]"


@dataclass(frozen=True, slots=True)
class LogMessage:
    """A message plus its arguments."""

    message: str
    args: tuple[LogArg, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, message: str, args: Mapping[str, Any] | None = None) -> LogMessage:
        """Build a message from a plain mapping of arguments."""
        if not args:
            return cls(message)
        return cls(message, tuple(LogArg(k, v) for k, v in args.items()))

    def __str__(self) -> str:
        parts = [self.message.strip()]
        parts.extend(f" {arg}" for arg in self.args)
        return "".join(parts).strip()


def render_error(error: BaseException) -> str:
    """Return the full traceback text for an exception."""
    return "".join(traceback.format_exception(error))


def format_message(level: LogLevel, message: LogMessage) -> str:
    """Default one-line rendering: ``<emoticon> <LEVEL>: <message>``."""
    return f"{level.emoticon} {level}: {message}"


def format_error(level: LogLevel, error: BaseException) -> str:
    """Default rendering of an error: ``<emoticon> <LEVEL>: <trace>``."""
    return f"{level.emoticon} {level}: {render_error(error)}"
