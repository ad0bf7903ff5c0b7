# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from onchain_copy_trading.clients.http import AsyncHttpClient
from onchain_copy_trading.clients.market_gateway import HttpMarketGateway
from onchain_copy_trading.clients.oklink import OkLinkClient
from onchain_copy_trading.clients.one_inch import OneInchClient
from onchain_copy_trading.clients.rpc_client import RpcClient
from onchain_copy_trading.config import Settings, get_settings
from onchain_copy_trading.events import TradeEventLogger, build_event_bus
from onchain_copy_trading.persistence.repositories.in_memory import (
    InMemoryManagedWalletRepository,
    InMemoryTradeRepository,
    InMemoryWatchedAddressRepository,
)
from onchain_copy_trading.persistence.repositories.sql import (
    Database,
    SqlManagedWalletRepository,
    SqlTradeRepository,
    SqlWatchedAddressRepository,
)
from onchain_copy_trading.services.pass_runner import PassRunner
from onchain_copy_trading.services.position_close import PositionCloseMonitorService
from onchain_copy_trading.services.profit_exit import ProfitExitMonitorService
from onchain_copy_trading.services.reporting import ReportingService
from onchain_copy_trading.services.signal import SignalDetectorService
from onchain_copy_trading.services.trade_execution import (
    SwapExecutionService,
    TradeExecutorService,
)
from onchain_copy_trading.utils.locks import KeyedLocks


def _storage_backend(settings: Settings) -> str:
    return settings.storage.backend


def _build_database(settings: Settings) -> Database:
    """Build the SQL database handle from storage settings."""
    return Database(settings.storage.database_url, echo=settings.storage.echo_sql)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP clients, gateway, repositories and passes."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    oklink_client = providers.Singleton(
        OkLinkClient,
        http_client=http_client,
        settings=config,
    )

    one_inch_client = providers.Singleton(
        OneInchClient,
        http_client=http_client,
        settings=config,
    )

    rpc_client = providers.Singleton(
        RpcClient,
        http_client=http_client,
        settings=config,
    )

    market_gateway = providers.Singleton(
        HttpMarketGateway,
        oklink=oklink_client,
        one_inch=one_inch_client,
        rpc=rpc_client,
        settings=config,
    )

    event_bus = providers.Singleton(build_event_bus)

    trade_event_logger = providers.Singleton(
        TradeEventLogger,
        event_bus=event_bus,
    )

    database = providers.Singleton(_build_database, config)

    storage_backend = providers.Callable(_storage_backend, config)

    watched_address_repository = providers.Selector(
        storage_backend,
        memory=providers.Singleton(InMemoryWatchedAddressRepository),
        sqlite=providers.Singleton(SqlWatchedAddressRepository, database=database),
    )

    managed_wallet_repository = providers.Selector(
        storage_backend,
        memory=providers.Singleton(InMemoryManagedWalletRepository),
        sqlite=providers.Singleton(SqlManagedWalletRepository, database=database),
    )

    trade_repository = providers.Selector(
        storage_backend,
        memory=providers.Singleton(InMemoryTradeRepository),
        sqlite=providers.Singleton(SqlTradeRepository, database=database),
    )

    submission_locks = providers.Singleton(KeyedLocks)

    swap_execution_service = providers.Singleton(
        SwapExecutionService,
        gateway=market_gateway,
        settings=config,
        submission_locks=submission_locks,
    )

    trade_executor_service = providers.Singleton(
        TradeExecutorService,
        gateway=market_gateway,
        trade_repository=trade_repository,
        swap_execution=swap_execution_service,
        event_bus=event_bus,
    )

    signal_detector_service = providers.Singleton(
        SignalDetectorService,
        gateway=market_gateway,
        watched_address_repository=watched_address_repository,
        managed_wallet_repository=managed_wallet_repository,
        trade_repository=trade_repository,
        trade_executor=trade_executor_service,
        settings=config,
    )

    profit_exit_monitor_service = providers.Singleton(
        ProfitExitMonitorService,
        gateway=market_gateway,
        trade_repository=trade_repository,
        managed_wallet_repository=managed_wallet_repository,
        swap_execution=swap_execution_service,
        settings=config,
        event_bus=event_bus,
    )

    position_close_monitor_service = providers.Singleton(
        PositionCloseMonitorService,
        gateway=market_gateway,
        trade_repository=trade_repository,
        settings=config,
        event_bus=event_bus,
    )

    reporting_service = providers.Singleton(
        ReportingService,
        watched_address_repository=watched_address_repository,
        managed_wallet_repository=managed_wallet_repository,
        trade_repository=trade_repository,
    )

    pass_runner = providers.Singleton(
        PassRunner,
        signal_detector=signal_detector_service,
        profit_exit_monitor=profit_exit_monitor_service,
        position_close_monitor=position_close_monitor_service,
        settings=config,
    )
