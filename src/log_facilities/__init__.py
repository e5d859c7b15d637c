"""Logger facade dispatching to pluggable, independently-enabled facilities."""

from __future__ import annotations

from .core.facilities import (
    FacilityRegistry,
    FileLoggerFacility,
    FirebaseLoggerFacility,
    JsonLoggerFacility,
    LoggerFacility,
    PrinterLoggerFacility,
    registry,
)
from .core.io import FileStoreNotifier, LocalFileStore
from .core.log_date import LogDate
from .core.logger import Logger
from .core.messages import LogArg, LogMessage
from .core.models import LogDecoration, LogLevel, LogLifecycle
from .core.scope import LogScope, default_scope

__all__ = [
    "FacilityRegistry",
    "FileLoggerFacility",
    "FileStoreNotifier",
    "FirebaseLoggerFacility",
    "JsonLoggerFacility",
    "LocalFileStore",
    "LogArg",
    "LogDate",
    "LogDecoration",
    "LogLevel",
    "LogLifecycle",
    "LogMessage",
    "LogScope",
    "Logger",
    "LoggerFacility",
    "PrinterLoggerFacility",
    "default_scope",
    "registry",
]
