"""MCP tool implementations.

Keep this layer thin: validate inputs, translate them into facility calls and
return JSON-serializable data structures.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from log_facilities.core.facilities import BaseFileFacility, FacilityRegistry, FileLoggerFacility, JsonLoggerFacility
from log_facilities.core.log_date import LogDate
from log_facilities.core.logger import Logger
from log_facilities.core.models import LogLevel

KINDS: dict[str, tuple[type[BaseFileFacility], ...]] = {
    "all": (FileLoggerFacility, JsonLoggerFacility),
    "text": (FileLoggerFacility,),
    "json": (JsonLoggerFacility,),
}


def _file_facilities(registry: FacilityRegistry, kind: str) -> list[tuple[str, BaseFileFacility]]:
    """Registered file facilities matching ``kind`` ("all", "text" or "json")."""
    try:
        types = KINDS[kind.strip().lower()]
    except KeyError as e:
        raise ValueError(f"Unknown kind '{kind}'. Valid values: {', '.join(KINDS)}.") from e
    out: list[tuple[str, BaseFileFacility]] = []
    for name in registry.names():
        facility = registry.get(name)
        if isinstance(facility, types):
            out.append((name, facility))
    return out


def _parse_after(after: str) -> LogDate:
    try:
        return LogDate.of(date.fromisoformat(after))
    except ValueError as e:
        raise ValueError("after must look like YYYY-MM-DD (e.g., 2025-12-30)") from e


def write_log_impl(
    *,
    logger: Logger,
    message: str,
    level: str = "info",
    source: str | None = None,
    args: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Implementation for the `write_log` MCP tool (fire-and-forget)."""
    if not message.strip():
        raise ValueError("message must not be empty")
    lvl = LogLevel.parse(level)
    logger.log(lvl, message, args, source=source)
    return {"accepted": True, "level": str(lvl), "source": source or logger.source}


async def list_log_files_impl(
    *,
    registry: FacilityRegistry,
    after: str | None = None,
    kind: str = "all",
) -> dict[str, Any]:
    """Implementation for the `list_log_files` MCP tool."""
    since = _parse_after(after) if after else None
    files: set[str] = set()
    for _, facility in _file_facilities(registry, kind):
        if since is None:
            found = await facility.scope.run(facility.files())
        else:
            found = await facility.scope.run(facility.files_after(since))
        files.update(p for p in found if p.endswith(facility.extension))
    ordered = sorted(files)
    return {"count": len(ordered), "files": ordered}


async def delete_log_file_impl(
    *,
    registry: FacilityRegistry,
    name: str,
    kind: str = "all",
) -> dict[str, Any]:
    """Implementation for the `delete_log_file` MCP tool."""
    if not name or "/" in name or "\\" in name or name in (".", ".."):
        raise ValueError("name must be a bare file name inside the log folder")

    deleted_from: list[str] = []
    for reg_name, facility in _file_facilities(registry, kind):
        if not name.endswith(facility.extension):
            continue
        await facility.scope.run(facility.delete(name))
        deleted_from.append(reg_name)
    return {"name": name, "facilities": deleted_from}
