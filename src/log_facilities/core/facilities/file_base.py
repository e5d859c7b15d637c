"""Shared plumbing of the file-backed facilities."""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import ClassVar

from ..io.base import DirectoryListing, FileStore, FileStoreNotifier, notify
from ..io.delegate import FolderGuardFileStore
from ..io.local import LocalFileStore
from ..log_date import LogDate
from ..messages import LogMessage
from ..models import LogLevel
from ..scope import LogScope, default_scope
from ..timestamps import Clock, utc_now
from .base import LoggerFacility
from .rotation import RotationController

logger = logging.getLogger(__name__)


class BaseFileFacility(LoggerFacility):
    """Base class for facilities writing one file per day under ``base_folder``.

    The synchronous ``log_*`` methods schedule the work on ``scope`` and return
    immediately; ``write``, ``write_message`` and ``write_error`` perform it
    and may be awaited directly. I/O failures drop the event, are logged and
    reported to ``notifier``; they never reach the caller.

    Entries are written one at a time in the order the writes were started,
    each stamped and placed by a single clock reading.
    """

    extension: ClassVar[str] = ".log"

    def __init__(
        self,
        base_folder: str,
        minimum_level: LogLevel = LogLevel.WARNING,
        *,
        store: FileStore | None = None,
        scope: LogScope | None = None,
        notifier: FileStoreNotifier | None = None,
        clock: Clock = utc_now,
        path_separator: str | None = None,
    ) -> None:
        self.base_folder = base_folder
        self.minimum_level = minimum_level
        self._scope = scope
        self._notifier = notifier
        self._clock = clock
        self._store: FileStore = store if store is not None else LocalFileStore()
        self._io = FolderGuardFileStore(base_folder, self._store, self._on_folder_missing)
        self._rotation = RotationController(
            base_folder,
            self.extension,
            path_separator=path_separator or self._store.path_separator,
            clock=clock,
            notifier=notifier,
            open_step=self._open_file,
        )
        self._prepared = False
        self._invalid = False
        self._order_lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._store!r})"

    @classmethod
    async def create(cls, base_folder: str, *args, **kwargs):
        """Construct and prepare a facility, raising ValueError if the folder is unusable."""
        facility = cls(base_folder, *args, **kwargs)
        await facility.prepare()
        return facility

    async def prepare(self) -> None:
        """Create the base folder; an unusable folder disables the facility."""
        if self._prepared:
            return
        if not await self._store.make_directories(self.base_folder):
            self._invalid = True
            notify(self._notifier, "on_log_folder_invalid", self.base_folder)
            raise ValueError(f"Base log folder is invalid: {self.base_folder}")
        self._prepared = True

    def _on_folder_missing(self, folder: str) -> None:
        logger.warning("Log folder is missing and cannot be created: %s", folder)
        notify(self._notifier, "on_log_folder_invalid", folder)

    @property
    def scope(self) -> LogScope:
        if self._scope is None:
            self._scope = default_scope()
        return self._scope

    @property
    def listing(self) -> DirectoryListing:
        return self._io

    @property
    def current_path(self) -> str | None:
        """The log file currently written to, None before the first write."""
        return self._rotation.current_path

    def is_enabled(self) -> bool:
        return not self._invalid

    def accepts(self, level: LogLevel) -> bool:
        return level.severity >= self.minimum_level.severity

    # Fire-and-forget entry points.

    def log_message(self, source: str, level: LogLevel, message: LogMessage) -> None:
        if self.accepts(level):
            self.scope.launch(self.write_message(source, level, message))

    def log_error(self, source: str, level: LogLevel, error: BaseException) -> None:
        if self.accepts(level):
            self.scope.launch(self.write_error(source, level, error))

    def log(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None = None,
        error: BaseException | None = None,
    ) -> None:
        if self.accepts(level) and (message is not None or error is not None):
            self.scope.launch(self.write(source, level, message, error))

    # Awaitable work.

    async def write(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None = None,
        error: BaseException | None = None,
    ) -> bool:
        """Write a message and/or an error as one ordered step; False if dropped."""
        if message is None and error is None:
            return False
        # Acquired before any other await so entries keep the order writes started in.
        async with self._order_lock:
            return await self._write_entry(source, level, message, error, self._clock())

    async def write_message(self, source: str, level: LogLevel, message: LogMessage) -> bool:
        """Write a message entry; False if the event was dropped."""
        return await self.write(source, level, message=message)

    async def write_error(self, source: str, level: LogLevel, error: BaseException) -> bool:
        """Write an error entry; False if the event was dropped."""
        return await self.write(source, level, error=error)

    @abstractmethod
    async def _write_entry(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None,
        error: BaseException | None,
        now: datetime,
    ) -> bool:
        """Format-specific write of whichever of ``message``/``error`` is set."""

    async def _with_log_file(
        self, level: LogLevel, now: datetime, action: Callable[[str], Awaitable[None]]
    ) -> bool:
        """Rotate to the file for ``now`` if needed and run ``action`` on it; False if dropped."""
        if not self.accepts(level) or self._invalid:
            return False

        if not self._prepared:
            try:
                await self.prepare()
            except ValueError as e:
                logger.warning("Dropped log event: %s", e)
                return False

        path: str | None = None
        try:
            path = await self._rotation.rotate(now)
            await action(path)
        except (OSError, UnicodeError) as e:
            target = path or self._rotation.target_path(now)
            logger.warning("Dropped log event for %s: %s", target, e)
            notify(self._notifier, "on_log_write_failed", target, e)
            return False
        return True

    async def _open_file(self, path: str) -> None:
        """Format-specific step run once per new log file."""
        await self._io.ensure_exists(path)

    # Listing and housekeeping.

    async def files(self) -> list[str]:
        """Absolute paths of the files under ``base_folder``."""
        return list(await self._io.list_files(self.base_folder))

    async def files_after(self, date: LogDate) -> list[str]:
        """Absolute paths of the log files named after a date later than ``date``."""
        return list(await self._io.list_files_after(self.base_folder, date))

    async def delete(self, name: str) -> None:
        """Delete a file residing in ``base_folder``."""
        await self._io.delete(f"{self.base_folder}{self._rotation.path_separator}{name}")

    async def delete_absolute(self, path: str) -> None:
        await self._io.delete(path)
