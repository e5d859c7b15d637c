"""MCP server entrypoint (stdio transport).

Exposes the configured log facilities as tools:
- write_log: log a message through every enabled facility
- list_log_files: list the rotated log files, optionally newer than a date
- delete_log_file: remove a rotated log file by name

Run locally (stdio):
    python -m log_facilities.server.log_server
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_facilities.core.facilities import registry
from log_facilities.core.logger import Logger
from log_facilities.core.settings import FacilitySettings, build_facilities, resolve_settings
from log_facilities.tools.files import delete_log_file_impl, list_log_files_impl, write_log_impl

LOGGER = logging.getLogger(__name__)

DEFAULT_SOURCE = "mcp"

mcp = FastMCP("log-facilities", json_response=True)
_logger = Logger(DEFAULT_SOURCE)


def _configure_logging() -> None:
    """Configure a reasonable default logging setup.

    stdout carries the MCP protocol, so diagnostics go to stderr.
    """
    level_name = os.getenv("LOG_FACILITIES_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def install_facilities(settings: FacilitySettings) -> list[str]:
    """Register the facilities enabled by ``settings``; returns the names registered."""
    installed: list[str] = []
    for name, facility in build_facilities(settings, scope=_logger.scope).items():
        if registry.register(name, facility):
            installed.append(name)
    return installed


@mcp.tool()
def write_log(
    message: str,
    level: str = "info",
    source: str | None = None,
    args: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Log a message through every enabled facility.

    Parameters
    ----------
    message:
        The message text.
    level:
        One of info, warning, error, crash (case-insensitive).
    source:
        Source tag recorded with the message (defaults to "mcp").
    args:
        Optional labelled values appended to the message.
    """
    return write_log_impl(logger=_logger, message=message, level=level, source=source, args=args)


@mcp.tool()
async def list_log_files(after: str | None = None, kind: str = "all") -> dict[str, Any]:
    """List rotated log files.

    Parameters
    ----------
    after:
        Only files named after a date strictly later than this YYYY-MM-DD.
    kind:
        "all", "text" (.log files) or "json" (.json files).

    Returns
    -------
    dict:
        {"count": int, "files": list[str]}
    """
    return await list_log_files_impl(registry=registry, after=after, kind=kind)


@mcp.tool()
async def delete_log_file(name: str, kind: str = "all") -> dict[str, Any]:
    """Delete a rotated log file (e.g., 2025-12-30.log) from the log folder."""
    return await delete_log_file_impl(registry=registry, name=name, kind=kind)


def main(argv: Sequence[str] | None = None) -> None:
    """Register facilities from the environment and start the MCP server over stdio."""
    _configure_logging()
    _ = argv or sys.argv[1:]
    settings = resolve_settings()
    installed = install_facilities(settings)
    LOGGER.info("Facilities installed: %s (folder=%s)", ", ".join(installed) or "none", settings.base_folder)
    try:
        mcp.run(transport="stdio")
    finally:
        _logger.scope.close(timeout=5.0)


if __name__ == "__main__":
    main()
