"""Log facilities and their registry."""

from __future__ import annotations

from .base import FacilityRegistry, LoggerFacility, registry
from .file import FileLoggerFacility
from .file_base import BaseFileFacility
from .firebase import FirebaseLoggerFacility, FirebaseSink
from .json_array import JsonLoggerFacility, JsonRecord
from .printer import LoggingPrinter, Printer, PrinterLoggerFacility, StreamPrinter
from .rotation import RotationController

__all__ = [
    "BaseFileFacility",
    "FacilityRegistry",
    "FileLoggerFacility",
    "FirebaseLoggerFacility",
    "FirebaseSink",
    "JsonLoggerFacility",
    "JsonRecord",
    "LoggerFacility",
    "LoggingPrinter",
    "Printer",
    "PrinterLoggerFacility",
    "RotationController",
    "StreamPrinter",
    "registry",
]
