"""File I/O contract and implementations."""

from __future__ import annotations

from .base import DirectoryListing, FileStore, FileStoreNotifier, notify, relative_to_size
from .delegate import FolderGuardFileStore, report_missing_folder
from .local import LocalFileStore

__all__ = [
    "DirectoryListing",
    "FileStore",
    "FileStoreNotifier",
    "FolderGuardFileStore",
    "LocalFileStore",
    "notify",
    "relative_to_size",
    "report_missing_folder",
]
