"""Fire-and-forget task scope for log work.

Log calls are synchronous for the caller; the actual work is a coroutine
launched on a background event loop owned by a :class:`LogScope`.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Coroutine
from concurrent.futures import Future, wait
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LogScope:
    """Runs launched coroutines on a lazily-started daemon thread.

    Launched work has no completion handle; :meth:`flush` is the only way to
    wait for it, and is meant for shutdown and tests. Do not call
    :meth:`flush` from a coroutine running on this scope.
    """

    def __init__(self, name: str = "log-facilities") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._pending: set[Future[None]] = set()

    def __repr__(self) -> str:
        return f"LogScope({self.name!r})"

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None or self._loop.is_closed():
                loop = asyncio.new_event_loop()
                thread = threading.Thread(target=loop.run_forever, name=self.name, daemon=True)
                thread.start()
                self._loop = loop
                self._thread = thread
            return self._loop

    def launch(self, coro: Coroutine[Any, Any, Any]) -> None:
        """Schedule ``coro``; failures are logged, never raised to the caller."""
        loop = self._ensure_loop()
        fut = asyncio.run_coroutine_threadsafe(self._run(coro), loop)
        with self._lock:
            self._pending.add(fut)
        fut.add_done_callback(self._discard)

    def submit(self, coro: Coroutine[Any, Any, T]) -> Future[T]:
        """Schedule ``coro`` and return a handle, for callers that need the result."""
        return asyncio.run_coroutine_threadsafe(coro, self._ensure_loop())

    async def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run ``coro`` on this scope and await its result from another event loop."""
        return await asyncio.wrap_future(self.submit(coro))

    def _discard(self, fut: Future[None]) -> None:
        with self._lock:
            self._pending.discard(fut)

    async def _run(self, coro: Coroutine[Any, Any, Any]) -> None:
        try:
            await coro
        except Exception:
            logger.exception("Scheduled log work failed in %s", self.name)

    def flush(self, timeout: float | None = None) -> bool:
        """Block until all launched work (including work launched meanwhile) is done.

        Returns False if ``timeout`` elapsed first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            with self._lock:
                snapshot = set(self._pending)
            if not snapshot:
                return True
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            _, not_done = wait(snapshot, timeout=remaining)
            if not_done and deadline is not None and time.monotonic() >= deadline:
                return False

    def close(self, timeout: float | None = None) -> None:
        """Flush pending work and stop the background loop."""
        self.flush(timeout)
        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = None
            self._thread = None
        if loop is None:
            return
        loop.call_soon_threadsafe(loop.stop)
        if thread is not None:
            thread.join(timeout)
        if not loop.is_running():
            loop.close()


_default_scope: LogScope | None = None
_default_lock = threading.Lock()


def default_scope() -> LogScope:
    """Return the process-wide scope used when none is supplied."""
    global _default_scope
    with _default_lock:
        if _default_scope is None:
            _default_scope = LogScope()
        return _default_scope
