# -*- coding: utf-8 -*-
"""Orchestrator: fires the detection, profit-exit and position-close passes on their intervals.

Each tick starts the pass in its own task behind the pass's PassGuard, so a
slow pass makes later ticks of the same kind drop instead of queueing.
Runs until shutdown_event is set or the task is cancelled; in-flight passes
are always allowed to finish.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Optional

import structlog

from onchain_copy_trading.config import Settings
from onchain_copy_trading.exceptions import ConfigurationError, CopyTradingError
from onchain_copy_trading.services.position_close import PositionCloseMonitorService
from onchain_copy_trading.services.profit_exit import ProfitExitMonitorService
from onchain_copy_trading.services.signal import SignalDetectorService
from onchain_copy_trading.utils.locks import PassGuard, PassOutcome


@dataclass(frozen=True)
class ScheduledPass:
    guard: PassGuard
    job: Callable[[], Awaitable[Any]]
    interval_seconds: float


class PassRunner:
    """Periodic trigger for the three pipeline passes."""

    def __init__(
        self,
        signal_detector: SignalDetectorService,
        profit_exit_monitor: ProfitExitMonitorService,
        position_close_monitor: PositionCloseMonitorService,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        sched = settings.scheduler
        self._passes: dict[str, ScheduledPass] = {
            "detection": ScheduledPass(
                PassGuard("detection", get_logger=get_logger),
                signal_detector.run_pass,
                sched.detection_interval_seconds,
            ),
            "profit_exit": ScheduledPass(
                PassGuard("profit_exit", get_logger=get_logger),
                profit_exit_monitor.run_pass,
                sched.profit_exit_interval_seconds,
            ),
            "position_close": ScheduledPass(
                PassGuard("position_close", get_logger=get_logger),
                position_close_monitor.run_pass,
                sched.position_close_interval_seconds,
            ),
        }
        self._inflight: set[asyncio.Task[Any]] = set()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def pass_names(self) -> list[str]:
        return list(self._passes)

    async def trigger(self, name: str) -> PassOutcome[Any]:
        """Run one pass now (skipped if it is already running).

        Configuration and pipeline errors are logged, not raised, so a timer keeps firing.
        """
        scheduled = self._passes[name]
        try:
            return await scheduled.guard.run(scheduled.job)
        except ConfigurationError as e:
            self._logger.error(
                "pass_aborted_configuration",
                pass_name=name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        except CopyTradingError as e:
            self._logger.warning(
                "pass_failed",
                pass_name=name,
                error_type=type(e).__name__,
                error_message=str(e),
            )
        except Exception:
            self._logger.exception("pass_unexpected_error", pass_name=name)
        return PassOutcome(ran=True)

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """Start one timer per pass; stop them when shutdown_event is set or on cancellation.

        Stopping only cancels the timers. Passes already in flight are awaited to
        completion, so a broadcast swap is always followed by its trade record.
        """
        self._logger.info(
            "pass_runner_started",
            intervals={name: p.interval_seconds for name, p in self._passes.items()},
        )
        timers = [
            asyncio.create_task(self._timer(name, p.interval_seconds, shutdown_event))
            for name, p in self._passes.items()
        ]
        try:
            await shutdown_event.wait()
        except asyncio.CancelledError:
            self._logger.info("pass_runner_shutdown_cancelled")
            await self._stop_timers(timers)
            await self._drain_inflight()
            raise

        self._logger.info("pass_runner_shutdown_started")
        await self._stop_timers(timers)
        await self._drain_inflight()

    async def _timer(self, name: str, interval: float, shutdown_event: asyncio.Event) -> None:
        while not shutdown_event.is_set():
            task = asyncio.create_task(self.trigger(name))
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue

    async def _stop_timers(self, timers: list[asyncio.Task[Any]]) -> None:
        for t in timers:
            t.cancel()
        await asyncio.gather(*timers, return_exceptions=True)

    async def _drain_inflight(self) -> None:
        # Passes are never cancelled; each one is bounded by HTTP timeouts and the receipt budget.
        pending = list(self._inflight)
        if not pending:
            return
        self._logger.info("pass_runner_draining", inflight=len(pending))
        await asyncio.gather(*pending, return_exceptions=True)
        self._logger.info("pass_runner_drained")
