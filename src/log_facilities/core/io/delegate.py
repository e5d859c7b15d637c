"""A FileStore wrapper that keeps a log folder in place before every operation."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..log_date import LogDate
from .base import FileStore

T = TypeVar("T")

FolderMissingHandler = Callable[[str], None]


def report_missing_folder(folder: str) -> None:
    """Default handler: a folder that cannot be created is a configuration error."""
    raise ValueError(f"Log folder is invalid: {folder}")


class FolderGuardFileStore:
    """Delegate every call to ``store`` after (re)creating ``folder``.

    If the folder cannot be created, ``on_folder_missing`` runs once the
    delegated call has finished (or failed).
    """

    def __init__(
        self,
        folder: str,
        store: FileStore,
        on_folder_missing: FolderMissingHandler | None = None,
    ) -> None:
        self.folder = folder
        self.store = store
        self.path_separator: str = store.path_separator
        self._on_folder_missing = on_folder_missing

    def __repr__(self) -> str:
        return f"FolderGuardFileStore({self.store!r})"

    async def _guarded(self, action: Callable[[], Awaitable[T]]) -> T:
        exists = await self.store.make_directories(self.folder)
        try:
            return await action()
        finally:
            if not exists and self._on_folder_missing is not None:
                self._on_folder_missing(self.folder)

    async def make_directories(self, path: str) -> bool:
        return await self._guarded(lambda: self.store.make_directories(path))

    async def size(self, path: str) -> int:
        return await self._guarded(lambda: self.store.size(path))

    async def write(self, path: str, position: int, contents: str) -> None:
        await self._guarded(lambda: self.store.write(path, position, contents))

    async def append(self, path: str, contents: str) -> None:
        await self._guarded(lambda: self.store.append(path, contents))

    async def ensure_exists(self, path: str) -> None:
        await self._guarded(lambda: self.store.ensure_exists(path))

    async def delete(self, path: str) -> None:
        await self._guarded(lambda: self.store.delete(path))

    async def list_files(self, path: str) -> list[str]:
        return list(await self._guarded(lambda: self.store.list_files(path)))

    async def list_files_after(self, path: str, date: LogDate) -> list[str]:
        return list(await self._guarded(lambda: self.store.list_files_after(path, date)))
