"""Plain-text daily log files (``<base_folder>/<YYYY-MM-DD>.log``)."""

from __future__ import annotations

from datetime import datetime

from ..messages import LogMessage, format_error, format_message, render_error
from ..models import LogLevel
from ..timestamps import datetime_stamp_prefix
from .file_base import BaseFileFacility

LF = "\n"


class FileLoggerFacility(BaseFileFacility):
    """Appends one human-readable, timestamped entry per event.

    Line format: ``[YYYY-MM-DD HH:MM:SS]: <emoticon> <LEVEL>: <message> [<arg>=<value>]``.
    """

    extension = ".log"

    async def _write_entry(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None,
        error: BaseException | None,
        now: datetime,
    ) -> bool:
        if message is not None and error is not None:
            # Message and trace share a single entry.
            body = f"{format_message(level, message)} {render_error(error)}"
        elif message is not None:
            body = format_message(level, message)
        else:
            body = format_error(level, error)
        line = f"{datetime_stamp_prefix(now)} {body.strip()}{LF}"
        return await self._with_log_file(level, now, lambda path: self._io.append(path, line))
