# -*- coding: utf-8 -*-
"""Unit tests for PassRunner."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

from onchain_copy_trading.config import SchedulerSettings
from onchain_copy_trading.exceptions import ConfigurationError, TransientGatewayError
from onchain_copy_trading.services.pass_runner import PassRunner


def _settings() -> SimpleNamespace:
    return SimpleNamespace(
        scheduler=SchedulerSettings(
            detection_interval_seconds=0.5,
            profit_exit_interval_seconds=1.0,
            position_close_interval_seconds=1.0,
        )
    )


def _runner() -> tuple[PassRunner, SimpleNamespace, Mock]:
    services = SimpleNamespace(
        detector=Mock(run_pass=AsyncMock(return_value="detected")),
        profit=Mock(run_pass=AsyncMock(return_value="profit")),
        close=Mock(run_pass=AsyncMock(return_value="closed")),
    )
    logger = Mock()
    runner = PassRunner(
        services.detector,
        services.profit,
        services.close,
        _settings(),  # type: ignore[arg-type]
        get_logger=lambda name: logger,
    )
    return runner, services, logger


async def test_pass_names() -> None:
    runner, _, _ = _runner()

    assert runner.pass_names == ["detection", "profit_exit", "position_close"]


async def test_trigger_returns_pass_result() -> None:
    runner, services, _ = _runner()

    outcome = await runner.trigger("profit_exit")

    assert outcome.ran is True
    assert outcome.result == "profit"
    services.profit.run_pass.assert_awaited_once()
    services.detector.run_pass.assert_not_awaited()


async def test_trigger_logs_configuration_error_instead_of_raising() -> None:
    runner, services, logger = _runner()
    services.detector.run_pass.side_effect = ConfigurationError("no enabled managed wallets")

    outcome = await runner.trigger("detection")

    assert outcome.ran is True
    assert outcome.result is None
    assert logger.error.call_args.args[0] == "pass_aborted_configuration"
    assert logger.error.call_args.kwargs["pass_name"] == "detection"


async def test_trigger_logs_pipeline_error_as_warning() -> None:
    runner, services, logger = _runner()
    services.close.run_pass.side_effect = TransientGatewayError("down", url="https://x.test")

    await runner.trigger("position_close")

    assert logger.warning.call_args.args[0] == "pass_failed"


async def test_trigger_skips_when_same_pass_is_running() -> None:
    runner, services, logger = _runner()
    release = asyncio.Event()

    async def slow() -> str:
        await release.wait()
        return "done"

    services.detector.run_pass.side_effect = slow
    first = asyncio.create_task(runner.trigger("detection"))
    await asyncio.sleep(0)

    second = await runner.trigger("detection")
    release.set()
    await first

    assert second.ran is False
    assert services.detector.run_pass.await_count == 1


async def test_run_fires_each_pass_and_stops_on_shutdown() -> None:
    runner, services, _ = _runner()
    shutdown = asyncio.Event()
    asyncio.get_running_loop().call_later(0.05, shutdown.set)

    await asyncio.wait_for(runner.run(shutdown), timeout=2.0)

    services.detector.run_pass.assert_awaited()
    services.profit.run_pass.assert_awaited()
    services.close.run_pass.assert_awaited()


async def test_shutdown_waits_for_inflight_pass_to_record_trade() -> None:
    runner, services, _ = _runner()
    shutdown = asyncio.Event()
    submitted = asyncio.Event()
    receipt_ready = asyncio.Event()
    saved: list[str] = []

    async def detection_with_pending_receipt() -> str:
        submitted.set()
        await receipt_ready.wait()
        saved.append("trade")
        return "detected"

    services.detector.run_pass.side_effect = detection_with_pending_receipt
    run_task = asyncio.create_task(runner.run(shutdown))
    await submitted.wait()

    shutdown.set()
    await asyncio.sleep(0.01)
    assert not run_task.done()

    receipt_ready.set()
    await asyncio.wait_for(run_task, timeout=2.0)

    assert saved == ["trade"]


async def test_cancelled_runner_still_lets_inflight_pass_finish() -> None:
    runner, services, _ = _runner()
    shutdown = asyncio.Event()
    started = asyncio.Event()
    finished: list[bool] = []

    async def slow_exit() -> str:
        started.set()
        await asyncio.sleep(0.05)
        finished.append(True)
        return "profit"

    services.profit.run_pass.side_effect = slow_exit
    run_task = asyncio.create_task(runner.run(shutdown))
    await started.wait()

    run_task.cancel()
    try:
        await asyncio.wait_for(run_task, timeout=2.0)
    except asyncio.CancelledError:
        pass

    assert finished == [True]
