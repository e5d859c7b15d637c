from __future__ import annotations

import asyncio
import threading

import pytest

from log_facilities.core.scope import LogScope, default_scope


def test_launch_runs_off_the_calling_thread(scope: LogScope) -> None:
    seen: list[str] = []

    async def work() -> None:
        await asyncio.sleep(0)
        seen.append(threading.current_thread().name)

    scope.launch(work())
    assert scope.flush(timeout=5.0)
    assert seen == ["test-scope"]


def test_flush_waits_for_work_launched_meanwhile(scope: LogScope) -> None:
    done: list[int] = []

    async def child() -> None:
        await asyncio.sleep(0.01)
        done.append(2)

    async def parent() -> None:
        done.append(1)
        scope.launch(child())

    scope.launch(parent())
    assert scope.flush(timeout=5.0)
    assert done == [1, 2]


def test_failures_are_logged_not_raised(scope: LogScope, caplog: pytest.LogCaptureFixture) -> None:
    async def boom() -> None:
        raise RuntimeError("boom")

    scope.launch(boom())
    assert scope.flush(timeout=5.0)
    assert "Scheduled log work failed" in caplog.text


def test_submit_returns_a_result(scope: LogScope) -> None:
    async def answer() -> int:
        return 42

    assert scope.submit(answer()).result(timeout=5.0) == 42


@pytest.mark.asyncio
async def test_run_from_another_loop(scope: LogScope) -> None:
    async def name() -> str:
        return threading.current_thread().name

    assert await scope.run(name()) == "test-scope"


def test_close_stops_the_thread_and_allows_restart() -> None:
    scope = LogScope("closing")
    scope.launch(asyncio.sleep(0))
    scope.close(timeout=5.0)
    assert not any(t.name == "closing" and t.is_alive() for t in threading.enumerate())

    # A closed scope starts a fresh loop on the next launch.
    scope.launch(asyncio.sleep(0))
    assert scope.flush(timeout=5.0)
    scope.close(timeout=5.0)


def test_default_scope_is_shared() -> None:
    assert default_scope() is default_scope()
