"""Clock and zero-padded stamp helpers (always UTC)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current wall-clock time in UTC."""
    return datetime.now(UTC)


def _normalize(value: datetime | None) -> datetime:
    if value is None:
        return utc_now()
    if value.tzinfo is not None:
        return value.astimezone(UTC)
    return value


def date_stamp(value: datetime | None = None) -> str:
    """``YYYY-MM-DD`` for ``value`` (now if None)."""
    v = _normalize(value)
    return f"{v.year:04d}-{v.month:02d}-{v.day:02d}"


def time_stamp(value: datetime | None = None) -> str:
    """``HH:MM:SS`` for ``value`` (now if None)."""
    v = _normalize(value)
    return f"{v.hour:02d}:{v.minute:02d}:{v.second:02d}"


def datetime_stamp(value: datetime | None = None) -> str:
    v = _normalize(value)
    return f"{date_stamp(v)} {time_stamp(v)}"


def datetime_stamp_prefix(value: datetime | None = None) -> str:
    """Prefix prepended to plain-text log lines: ``[YYYY-MM-DD HH:MM:SS]:``."""
    return f"[{datetime_stamp(value)}]:"
