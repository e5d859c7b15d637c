"""Calendar dates used to name and filter rotated log files.

A date is encoded as ``YYYY<sep>MM<sep>DD`` (``2023-08-23``) or, without a
separator, as ``YYYYMMDD``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime

SEPARATOR = "-"

LENGTH_WITHOUT_SEPARATOR = 8
LENGTH_WITH_SEPARATOR = 10

_DIGITS_RE = re.compile(r"^(?P<y>[0-9]{4})(?P<m>[0-9]{2})(?P<d>[0-9]{2})$")


@dataclass(frozen=True, slots=True, order=True)
class LogDate:
    """Immutable (year, month, day) value; the separator is not part of equality."""

    year: int
    month: int
    day: int
    separator: str | None = field(default=SEPARATOR, compare=False)

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError("The value of `month` must be within the range 1..12")
        if not 1 <= self.day <= 31:
            raise ValueError("The value of `day` must be within the range 1..31")

    @classmethod
    def of(cls, value: date | datetime, separator: str | None = SEPARATOR) -> LogDate:
        return cls(value.year, value.month, value.day, separator)

    def after(self, other: LogDate) -> bool:
        """True if this date is strictly later than ``other``."""
        return (self.year, self.month, self.day) > (other.year, other.month, other.day)

    def encode(self, separator: str | None = SEPARATOR) -> str:
        return encode(self, separator)

    def __str__(self) -> str:
        return encode(self, self.separator)


def encode(value: LogDate, separator: str | None = SEPARATOR) -> str:
    """Return the fixed-width filename token for a date."""
    sep = separator or ""
    return f"{value.year:04d}{sep}{value.month:02d}{sep}{value.day:02d}"


def _date_pattern(separator: str | None) -> re.Pattern[str]:
    if separator is None:
        return _DIGITS_RE
    sep = re.escape(separator)
    return re.compile(rf"^(?P<y>[0-9]{{4}}){sep}(?P<m>[0-9]{{2}}){sep}(?P<d>[0-9]{{2}})$")


def decode(file_name: str, separator: str | None = SEPARATOR) -> LogDate | None:
    """Parse a file name such as ``2023-08-23.log`` into a LogDate, or None.

    Only the last extension is stripped. Wrong length, non-digits or an
    out-of-range month/day all yield None.
    """
    stem = file_name.rsplit(".", 1)[0]
    expected = LENGTH_WITHOUT_SEPARATOR if separator is None else LENGTH_WITH_SEPARATOR
    if separator is not None and len(separator) != 1:
        return None
    if len(stem) != expected:
        return None

    m = _date_pattern(separator).match(stem)
    if not m:
        return None

    try:
        return LogDate(int(m.group("y")), int(m.group("m")), int(m.group("d")), separator)
    except ValueError:
        return None


def is_after(file_name: str, value: LogDate | None) -> bool:
    """True if the file name decodes to a date after ``value`` (or any date if None)."""
    separator = value.separator if value is not None else SEPARATOR
    decoded = decode(file_name, separator)
    return decoded is not None and (value is None or decoded.after(value))
