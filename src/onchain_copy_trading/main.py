# -*- coding: utf-8 -*-
"""
Entry point for the on-chain copy-trading engine.

Orchestrates: logging, settings, container, storage schema, trade event logging,
the three periodic passes, shutdown (SIGINT or CancelledError).
Passes: detection -> executor (opens trades), profit exit (sells principal),
position close (closes dust positions).

Run with: python -m onchain_copy_trading.main  (or the onchain-copy-trading script)

Notebook usage:
    from onchain_copy_trading.main import run
    await run()  # Interrupt kernel to stop; system will shut down on CancelledError.
"""
from __future__ import annotations

import asyncio
import signal
from typing import Any

import structlog

from onchain_copy_trading.DI import Container
from onchain_copy_trading.config import get_settings
from onchain_copy_trading.exceptions import MissingRequiredConfigError
from onchain_copy_trading.logging.config import configure_logging


def _setup_sigint(shutdown_event: asyncio.Event) -> None:
    try:
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(
            signal.SIGINT,
            lambda: shutdown_event.set(),
        )
    except NotImplementedError:
        pass  # Windows has no add_signal_handler


async def _do_shutdown(container: Container, logger: Any) -> None:
    """Release network and database resources. Safe on normal shutdown or CancelledError."""
    await container.http_client().aclose()
    if container.config().storage.backend == "sqlite":
        await container.database().dispose()
    logger.info("main_shutdown_complete")


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    if not settings.api.oklink_api_key:
        logger.error(
            "main_missing_oklink_api_key",
            message="API__OKLINK_API_KEY is not set",
        )
        raise MissingRequiredConfigError("API__OKLINK_API_KEY")

    container = Container()
    if settings.storage.backend == "sqlite":
        await container.database().init_schema()
    container.trade_event_logger().start()
    runner = container.pass_runner()

    shutdown_event = asyncio.Event()
    _setup_sigint(shutdown_event)
    logger.info(
        "main_started",
        storage_backend=settings.storage.backend,
        passes=runner.pass_names,
    )
    try:
        await runner.run(shutdown_event)
    finally:
        await _do_shutdown(container, logger)


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
