"""Local file system implementation of :class:`FileStore` backed by aiofiles."""

from __future__ import annotations

import asyncio
import logging
import os

import aiofiles
import aiofiles.os

from ..log_date import LogDate, is_after
from .base import relative_to_size

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
# Lone surrogates (e.g. from os.fsdecode) are written as backslash escapes.
ENCODE_ERRORS = "backslashreplace"


class LocalFileStore:
    """FileStore for POSIX and Windows file systems.

    Physical writes are serialized per path, so two concurrent appends to the
    same file never interleave their bytes while different files proceed in
    parallel.
    """

    def __init__(self) -> None:
        self.path_separator: str = os.sep
        self._locks: dict[str, asyncio.Lock] = {}

    def __repr__(self) -> str:
        return f"LocalFileStore({os.name})"

    def _lock_for(self, path: str) -> asyncio.Lock:
        key = os.path.abspath(path)
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks.setdefault(key, asyncio.Lock())
        return lock

    async def make_directories(self, path: str) -> bool:
        try:
            await aiofiles.os.makedirs(path, exist_ok=True)
        except OSError as e:
            logger.warning("Cannot create directory %s: %s", path, e)
        return await aiofiles.os.path.isdir(path)

    async def size(self, path: str) -> int:
        try:
            return await aiofiles.os.path.getsize(path)
        except FileNotFoundError:
            return 0

    async def write(self, path: str, position: int, contents: str) -> None:
        data = contents.encode(ENCODING, ENCODE_ERRORS)
        async with self._lock_for(path):
            mode = "r+b" if await aiofiles.os.path.exists(path) else "w+b"
            async with aiofiles.open(path, mode) as f:
                size = await f.seek(0, os.SEEK_END)
                await f.seek(relative_to_size(position, size))
                await f.write(data)

    async def append(self, path: str, contents: str) -> None:
        data = contents.encode(ENCODING, ENCODE_ERRORS)
        async with self._lock_for(path):
            async with aiofiles.open(path, "ab") as f:
                await f.write(data)

    async def ensure_exists(self, path: str) -> None:
        parent = os.path.dirname(os.path.abspath(path))
        if not await self.make_directories(parent):
            raise FileNotFoundError(f"Cannot create parent directory: {parent}")
        async with self._lock_for(path):
            async with aiofiles.open(path, "ab"):
                pass

    async def delete(self, path: str) -> None:
        async with self._lock_for(path):
            try:
                await aiofiles.os.remove(path)
            except FileNotFoundError:
                logger.debug("Nothing to delete at %s", path)

    async def list_files(self, path: str) -> list[str]:
        return await self._walk(path, None)

    async def list_files_after(self, path: str, date: LogDate) -> list[str]:
        return await self._walk(path, date)

    async def _walk(self, path: str, date: LogDate | None) -> list[str]:
        """Recursively collect canonical file paths, optionally filtered by date."""
        out: list[str] = []
        pending = [path]
        while pending:
            current = pending.pop()
            try:
                entries = await aiofiles.os.scandir(current)
            except (FileNotFoundError, NotADirectoryError):
                continue
            with entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        pending.append(entry.path)
                        continue
                    if not entry.is_file():
                        continue
                    if date is not None and not is_after(entry.name, date):
                        continue
                    out.append(os.path.realpath(entry.path))
        return out
