"""The ``Logger`` facade.

Configure facilities once at startup through :data:`registry`, then create
one ``Logger`` per source tag:

    registry.register("files", FileLoggerFacility("/var/log/app", LogLevel.INFO))
    log = Logger("Bootstrap")
    log.info("boot", {"version": "1.2"})
    log.error("fetch failed", error=exc)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .facilities.base import FacilityRegistry, registry as default_registry
from .messages import LogMessage
from .models import LogDecoration, LogLevel, LogLifecycle
from .scope import LogScope, default_scope

logger = logging.getLogger(__name__)


class Logger:
    """Dispatches messages and errors to every enabled facility.

    Calls return immediately: the dispatch runs on ``scope`` and nothing is
    raised back to the caller.
    """

    def __init__(
        self,
        source: str,
        decoration: LogDecoration | None = None,
        scope: LogScope | None = None,
        registry: FacilityRegistry | None = None,
    ) -> None:
        self.source = source
        self.decoration = decoration
        self.scope = scope if scope is not None else default_scope()
        self.registry = registry if registry is not None else default_registry

    def __repr__(self) -> str:
        return f"Logger({self.source!r})"

    def info(
        self,
        message: str | LogMessage | None = None,
        args: Mapping[str, Any] | None = None,
        *,
        error: BaseException | None = None,
        source: str | None = None,
    ) -> None:
        self.log(LogLevel.INFO, message, args, error=error, source=source)

    def warning(
        self,
        message: str | LogMessage | None = None,
        args: Mapping[str, Any] | None = None,
        *,
        error: BaseException | None = None,
        source: str | None = None,
    ) -> None:
        self.log(LogLevel.WARNING, message, args, error=error, source=source)

    def error(
        self,
        message: str | LogMessage | None = None,
        args: Mapping[str, Any] | None = None,
        *,
        error: BaseException | None = None,
        source: str | None = None,
    ) -> None:
        self.log(LogLevel.ERROR, message, args, error=error, source=source)

    def crash(
        self,
        message: str | LogMessage | None = None,
        args: Mapping[str, Any] | None = None,
        *,
        error: BaseException | None = None,
        source: str | None = None,
    ) -> None:
        self.log(LogLevel.CRASH, message, args, error=error, source=source)

    def lifecycle(self, event: LogLifecycle, *, source: str | None = None) -> None:
        """Log a lifecycle change at INFO using this logger's decoration."""
        self.info(LogLifecycle.format(event, self.decoration), source=source)

    def log(
        self,
        level: LogLevel,
        message: str | LogMessage | None = None,
        args: Mapping[str, Any] | None = None,
        *,
        error: BaseException | None = None,
        source: str | None = None,
    ) -> None:
        """Log at ``level``; a call with neither message nor error is dropped."""
        if message is None and error is None:
            logger.debug("Dropping empty log call from %s", self.source)
            return

        if isinstance(message, str):
            message = LogMessage.of(message, args)
        self.scope.launch(self._dispatch(source or self.source, level, message, error))

    async def _dispatch(
        self,
        source: str,
        level: LogLevel,
        message: LogMessage | None,
        error: BaseException | None,
    ) -> None:
        for facility in self.registry.enabled_facilities():
            try:
                facility.log(source, level, message, error)
            except Exception:
                logger.exception("Facility %r failed to log", facility)
