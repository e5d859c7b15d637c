"""Daily log-file rotation shared by the file-backed facilities."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..io.base import FileStoreNotifier, notify
from ..timestamps import Clock, date_stamp, utc_now

OpenStep = Callable[[str], Awaitable[None]]


class RotationController:
    """Tracks the log file a facility currently writes to.

    The target name is ``<base_folder><sep><YYYY-MM-DD><extension>``, computed
    on every call. When it differs from the held path, the close
    notification, the format-specific ``open_step``, the path update and the
    open notification run as one transition under a lock: concurrent callers
    inside the same rotation window perform it exactly once, the others wait
    and then see the new path.
    """

    def __init__(
        self,
        base_folder: str,
        extension: str,
        *,
        path_separator: str,
        clock: Clock = utc_now,
        notifier: FileStoreNotifier | None = None,
        open_step: OpenStep | None = None,
    ) -> None:
        self.base_folder = base_folder
        self.extension = extension
        self.path_separator = path_separator
        self._clock = clock
        self._notifier = notifier
        self._open_step = open_step
        self._current: str | None = None
        self._lock = asyncio.Lock()

    @property
    def current_path(self) -> str | None:
        return self._current

    def target_path(self, now: datetime | None = None) -> str:
        day = date_stamp(now if now is not None else self._clock())
        return f"{self.base_folder}{self.path_separator}{day}{self.extension}"

    async def rotate(self, now: datetime | None = None) -> str:
        """Return the path to write to at ``now``, rotating first if the day changed."""
        target = self.target_path(now)
        if self._current == target:
            return target

        async with self._lock:
            previous = self._current
            if previous == target:
                return target
            if previous is not None:
                notify(self._notifier, "on_log_file_closed", previous)
            if self._open_step is not None:
                await self._open_step(target)
            self._current = target
            notify(self._notifier, "on_log_file_opened", target)
        return target
