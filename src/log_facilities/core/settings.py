"""Facility configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .facilities.base import LoggerFacility
from .facilities.file import FileLoggerFacility
from .facilities.json_array import JsonLoggerFacility
from .facilities.printer import PrinterLoggerFacility
from .io.base import FileStoreNotifier
from .models import LogLevel
from .scope import LogScope

TEXT_FACILITY = "text"
JSON_FACILITY = "json"
PRINTER_FACILITY = "printer"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class FacilitySettings:
    base_folder: str = "logs"
    minimum_level: LogLevel = LogLevel.WARNING
    text_enabled: bool = True
    json_enabled: bool = True
    printer_enabled: bool = False


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be one of: 1/true/yes/on or 0/false/no/off")


def resolve_settings(cfg: FacilitySettings | None = None) -> FacilitySettings:
    """Return settings with optional env overrides applied."""
    if cfg is None:
        cfg = FacilitySettings()

    changes: dict[str, object] = {}

    folder = os.getenv("LOG_FACILITIES_BASE_FOLDER")
    if folder:
        changes["base_folder"] = folder

    level = os.getenv("LOG_FACILITIES_MIN_LEVEL")
    if level:
        try:
            changes["minimum_level"] = LogLevel.parse(level)
        except ValueError as exc:
            raise ValueError(f"LOG_FACILITIES_MIN_LEVEL is invalid: {exc}") from exc

    for env, field_name in (
        ("LOG_FACILITIES_TEXT", "text_enabled"),
        ("LOG_FACILITIES_JSON", "json_enabled"),
        ("LOG_FACILITIES_PRINTER", "printer_enabled"),
    ):
        flag = _env_flag(env)
        if flag is not None:
            changes[field_name] = flag

    if not changes:
        return cfg
    return replace(cfg, **changes)


def build_facilities(
    settings: FacilitySettings,
    *,
    scope: LogScope | None = None,
    notifier: FileStoreNotifier | None = None,
) -> dict[str, LoggerFacility]:
    """Create the facilities enabled by ``settings``, keyed by registration name."""
    out: dict[str, LoggerFacility] = {}
    if settings.printer_enabled:
        out[PRINTER_FACILITY] = PrinterLoggerFacility(minimum_level=settings.minimum_level)
    if settings.text_enabled:
        out[TEXT_FACILITY] = FileLoggerFacility(
            settings.base_folder, settings.minimum_level, scope=scope, notifier=notifier
        )
    if settings.json_enabled:
        out[JSON_FACILITY] = JsonLoggerFacility(
            settings.base_folder, settings.minimum_level, scope=scope, notifier=notifier
        )
    return out
