# -*- coding: utf-8 -*-
"""Concurrency primitives: skip-if-busy pass guard and per-key submission locks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import structlog

T = TypeVar("T")


@dataclass(frozen=True)
class PassOutcome(Generic[T]):
    """Result of PassGuard.run: whether the job ran, and its return value if it did."""

    ran: bool
    result: Optional[T] = None


class PassGuard:
    """Non-blocking mutual exclusion for a periodic pass.

    If a previous invocation still holds the guard, a new invocation is dropped
    immediately (no queueing). One guard instance per pass type.
    """

    def __init__(
        self,
        name: str,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._name = name
        self._lock = asyncio.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def name(self) -> str:
        return self._name

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def run(self, job: Callable[[], Awaitable[T]]) -> PassOutcome[T]:
        """Run job() unless the guard is already held; never waits for the holder."""
        # locked() and acquire() run without a suspension point in between,
        # so no other task can take the lock after the check.
        if self._lock.locked():
            self._logger.info("pass_skipped_busy", pass_name=self._name)
            return PassOutcome(ran=False)
        async with self._lock:
            return PassOutcome(ran=True, result=await job())


class KeyedLocks:
    """One asyncio.Lock per key, created on demand.

    Used as the per-(chain, wallet) submission queue: holders of the same key
    run one after another in FIFO order, so nonces are taken in order.
    """

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}

    def get(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
