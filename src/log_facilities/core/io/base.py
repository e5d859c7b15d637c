"""File I/O contracts shared by every file-backed facility."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Protocol

from ..log_date import LogDate

logger = logging.getLogger(__name__)


def relative_to_size(position: int, size: int) -> int:
    """Return the absolute offset for a relative ``position`` in a file of ``size`` bytes.

    Non-negative positions count from the start of the file, negative ones
    from EOF (``-1`` is the last byte). The result is clamped to ``[0, size]``.
    """
    absolute = position + size if position < 0 else position
    return max(0, min(absolute, size))


class DirectoryListing(Protocol):
    """Listing of the log files residing inside a directory."""

    async def list_files(self, path: str) -> Collection[str]:
        """Return absolute paths of the regular files under ``path``."""
        ...

    async def list_files_after(self, path: str, date: LogDate) -> Collection[str]:
        """Like :meth:`list_files`, keeping only files named after a date later than ``date``."""
        ...


class FileStore(DirectoryListing, Protocol):
    """Async file I/O contract; implementations are platform-specific.

    No file handle is held across calls: every operation opens, positions,
    writes and closes on its own.
    """

    path_separator: str

    async def make_directories(self, path: str) -> bool:
        """Create ``path`` and its parents; True if it is (now) a directory."""
        ...

    async def size(self, path: str) -> int:
        """Size in bytes, 0 if the file is missing."""
        ...

    async def write(self, path: str, position: int, contents: str) -> None:
        """Overwrite bytes starting at a relative ``position`` (see :func:`relative_to_size`)."""
        ...

    async def append(self, path: str, contents: str) -> None:
        """Write at the true end of the file."""
        ...

    async def ensure_exists(self, path: str) -> None:
        """Create an empty file (and its parent directories) if missing."""
        ...

    async def delete(self, path: str) -> None:
        """Remove a file; missing files are ignored."""
        ...


class FileStoreNotifier:
    """Side-channel callbacks for file facilities.

    Every hook is a no-op by default; override the ones you need.
    """

    def on_log_file_opened(self, path: str) -> None:
        """A facility started writing to a new log file."""

    def on_log_file_closed(self, path: str) -> None:
        """A facility stopped writing to a log file after rotating away from it."""

    def on_log_folder_invalid(self, path: str) -> None:
        """The log folder could not be prepared."""

    def on_log_write_failed(self, path: str, error: Exception) -> None:
        """A single write failed; the event was dropped."""


def notify(notifier: FileStoreNotifier | None, hook: str, *args: object) -> None:
    """Invoke a notifier hook, logging (never raising) its failures."""
    if notifier is None:
        return
    try:
        getattr(notifier, hook)(*args)
    except Exception:
        logger.exception("Notifier hook %s failed", hook)
