# -*- coding: utf-8 -*-
"""Unit tests for PassGuard and KeyedLocks."""

from __future__ import annotations

import asyncio

from onchain_copy_trading.utils.locks import KeyedLocks, PassGuard


async def test_pass_guard_runs_job_and_returns_result() -> None:
    guard = PassGuard("detection")

    async def job() -> int:
        return 42

    outcome = await guard.run(job)

    assert outcome.ran is True
    assert outcome.result == 42
    assert guard.busy is False


async def test_pass_guard_skips_while_previous_run_is_in_progress() -> None:
    guard = PassGuard("detection")
    release = asyncio.Event()
    calls = 0

    async def slow_job() -> str:
        nonlocal calls
        calls += 1
        await release.wait()
        return "done"

    first = asyncio.create_task(guard.run(slow_job))
    await asyncio.sleep(0)
    assert guard.busy is True

    second = await guard.run(slow_job)
    release.set()
    first_outcome = await first

    assert second.ran is False
    assert second.result is None
    assert first_outcome.ran is True
    assert first_outcome.result == "done"
    assert calls == 1


async def test_pass_guard_releases_after_job_error() -> None:
    guard = PassGuard("profit_exit")

    async def failing() -> None:
        raise RuntimeError("boom")

    try:
        await guard.run(failing)
    except RuntimeError:
        pass

    assert guard.busy is False


async def test_keyed_locks_returns_same_lock_per_key() -> None:
    locks = KeyedLocks()

    a = locks.get(("bsc", "0xabc"))
    b = locks.get(("bsc", "0xabc"))
    c = locks.get(("eth", "0xabc"))

    assert a is b
    assert a is not c
    assert len(locks) == 2


async def test_keyed_locks_serialize_holders_of_same_key() -> None:
    locks = KeyedLocks()
    order: list[str] = []

    async def hold(name: str) -> None:
        async with locks.get("wallet"):
            order.append(f"{name}-in")
            await asyncio.sleep(0)
            order.append(f"{name}-out")

    await asyncio.gather(hold("a"), hold("b"))

    assert order == ["a-in", "a-out", "b-in", "b-out"]
