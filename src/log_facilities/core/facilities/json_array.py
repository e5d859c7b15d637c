"""JSON-array daily log files (``<base_folder>/<YYYY-MM-DD>.json``).

Each file holds a single JSON array that stays valid after every append:
a new file is seeded with ``[]`` and every record overwrites the closing
bracket with an optional comma, the object and a fresh closing bracket.
Files are never re-parsed or rewritten.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from ..messages import LogArg, LogMessage, format_value, render_error
from ..models import LogLevel
from ..timestamps import datetime_stamp
from .file_base import BaseFileFacility

ARRAY_OPEN = "["
ARRAY_CLOSE = "]"
EMPTY_ARRAY = ARRAY_OPEN + ARRAY_CLOSE

_ESCAPES = {
    "\\": "\\\\",
    "/": "\\/",
    '"': '\\"',
    "\b": "\\b",
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
}


def json_escape(text: str) -> str:
    """Escape a string for a JSON string literal (remaining control chars as ``\\uXXXX``)."""
    out: list[str] = []
    for ch in text:
        escaped = _ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif ord(ch) < 0x20:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "".join(out)


def json_quote(text: str) -> str:
    return f'"{json_escape(text)}"'


def arg_text(value: Any) -> str:
    """Textual value of an argument; containers use the debug rendering."""
    if isinstance(value, str):
        return value
    return format_value(value)


class JsonRecord(BaseModel):
    """One element of the JSON array; exactly one of ``message``/``error`` is set."""

    model_config = ConfigDict(frozen=True)

    source: str
    time: str
    level: str
    message: str | None = None
    error: str | None = None
    args: dict[str, str] | None = None

    @model_validator(mode="after")
    def _one_body(self) -> JsonRecord:
        if (self.message is None) == (self.error is None):
            raise ValueError("exactly one of message or error must be set")
        return self

    @classmethod
    def from_message(cls, source: str, level: LogLevel, message: LogMessage, time: datetime) -> JsonRecord:
        return cls(
            source=source,
            time=datetime_stamp(time),
            level=str(level),
            message=message.message,
            args=_args(message.args),
        )

    @classmethod
    def from_error(cls, source: str, level: LogLevel, error: BaseException, time: datetime) -> JsonRecord:
        return cls(
            source=source,
            time=datetime_stamp(time),
            level=str(level),
            error=render_error(error),
        )

    def to_json(self) -> str:
        """Serialize with keys in the order source, time, level, message, error, args."""
        entries = [
            f"{json_quote('source')}:{json_quote(self.source)}",
            f"{json_quote('time')}:{json_quote(self.time)}",
            f"{json_quote('level')}:{json_quote(self.level)}",
        ]
        if self.message is not None:
            entries.append(f"{json_quote('message')}:{json_quote(self.message)}")
        if self.error is not None:
            entries.append(f"{json_quote('error')}:{json_quote(self.error)}")
        if self.args:
            inner = ",".join(f"{json_quote(k)}:{json_quote(v)}" for k, v in self.args.items())
            entries.append(f"{json_quote('args')}:{{{inner}}}")
        return "{" + ",".join(entries) + "}"


def _args(args: tuple[LogArg, ...]) -> dict[str, str] | None:
    out = {arg.label: arg_text(arg.value) for arg in args if arg.value is not None}
    return out or None


class JsonLoggerFacility(BaseFileFacility):
    """Keeps one JSON array of :class:`JsonRecord` objects per day.

    A message with an error yields two records, the message first.
    """

    extension = ".json"

    async def _open_file(self, path: str) -> None:
        # Runs once per path under the rotation lock, so seeding never repeats.
        if await self._io.size(path) == 0:
            await self._io.ensure_exists(path)
            await self._io.append(path, EMPTY_ARRAY)

    async def _append_record(self, path: str, record: JsonRecord) -> None:
        # Callers hold the facility's ordering lock, so size and write stay paired.
        # A seeded file without records is exactly "[]".
        prefix = "," if await self._io.size(path) > len(EMPTY_ARRAY) else ""
        await self._io.write(path, -1, f"{prefix}{record.to_json()}{ARRAY_CLOSE}")

    async def _write_entry(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None,
        error: BaseException | None,
        now: datetime,
    ) -> bool:
        records: list[JsonRecord] = []
        if message is not None:
            records.append(JsonRecord.from_message(source, level, message, now))
        if error is not None:
            records.append(JsonRecord.from_error(source, level, error, now))

        async def append_records(path: str) -> None:
            for record in records:
                await self._append_record(path, record)

        return await self._with_log_file(level, now, append_records)
