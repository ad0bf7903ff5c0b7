# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest

from onchain_copy_trading.clients.market_gateway import IMarketGateway
from onchain_copy_trading.config import Settings, StorageSettings, TradingSettings
from onchain_copy_trading.models.managed_wallet import ManagedWallet
from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.models.watched_address import WatchedAddress
from onchain_copy_trading.persistence.repositories.in_memory import (
    InMemoryManagedWalletRepository,
    InMemoryTradeRepository,
    InMemoryWatchedAddressRepository,
)

BSC = "bsc"
WBNB = "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"
USDT_BSC = "0x55d398326f99059ff775485246999027b3197955"
ALT_TOKEN = "0x1111111111111111111111111111111111111111"


class FakeEventBus:
    """Minimal event bus fake for asserting dispatched events."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)


@pytest.fixture
def watched_address() -> str:
    """Default watched address used by tests."""
    return "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"


@pytest.fixture
def wallet_address() -> str:
    """Default managed wallet address used by tests."""
    return "0x9f8e7d6c5b4a39281706f5e4d3c2b1a098765432"


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def settings() -> Settings:
    """Settings with in-memory storage and no delay between receipt polls."""
    return Settings(
        trading=TradingSettings(receipt_poll_seconds=0.0, receipt_max_attempts=3),
        storage=StorageSettings(backend="memory"),
    )


@pytest.fixture
def watched_factory(watched_address: str) -> Callable[..., WatchedAddress]:
    """Build WatchedAddress with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> WatchedAddress:
        return WatchedAddress.create(
            chain=overrides.pop("chain", BSC),
            address=overrides.pop("address", watched_address),
            enabled=overrides.pop("enabled", True),
            last_seen_tx_hash=overrides.pop("last_seen_tx_hash", None),
            last_seen_tx_time=overrides.pop("last_seen_tx_time", None),
            id=overrides.pop("id", None),
        )

    return _build


@pytest.fixture
def wallet_factory(
    wallet_address: str,
    D: Callable[[Any], Decimal],
) -> Callable[..., ManagedWallet]:
    """Build ManagedWallet with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> ManagedWallet:
        return ManagedWallet.create(
            chain=overrides.pop("chain", BSC),
            address=overrides.pop("address", wallet_address),
            secret_key=overrides.pop("secret_key", "0x" + "ab" * 32),
            fixed_exit_amount=overrides.pop("fixed_exit_amount", D("0.1")),
            enabled=overrides.pop("enabled", True),
            id=overrides.pop("id", None),
        )

    return _build


@pytest.fixture
def trade_factory(
    watched_address: str,
    wallet_address: str,
    D: Callable[[Any], Decimal],
) -> Callable[..., Trade]:
    """Build Trade (OPEN by default) with sensible defaults and easy overrides."""

    def _build(**overrides: Any) -> Trade:
        status = overrides.pop("status", TradeStatus.OPEN)
        return Trade.create(
            chain=overrides.pop("chain", BSC),
            watched_address=overrides.pop("watched_address", watched_address),
            wallet_address=overrides.pop("wallet_address", wallet_address),
            follow_buy_tx_hash=overrides.pop("follow_buy_tx_hash", "0xfollow"),
            follow_buy_time=overrides.pop("follow_buy_time", None),
            buy_token_address=overrides.pop("buy_token_address", ALT_TOKEN),
            buy_symbol=overrides.pop("buy_symbol", "ALT"),
            follow_buy_amount=overrides.pop("follow_buy_amount", D("1000")),
            status=status,
            buy_token_decimals=overrides.pop("buy_token_decimals", 18),
            wallet_buy_tx_hash=overrides.pop("wallet_buy_tx_hash", "0xbuy"),
            wallet_buy_time=overrides.pop("wallet_buy_time", None),
            wallet_buy_amount=overrides.pop("wallet_buy_amount", D("500")),
            wallet_exit_amount=overrides.pop("wallet_exit_amount", D("0.99")),
            gas_cost=overrides.pop("gas_cost", D("0.01")),
            failure_reason=overrides.pop(
                "failure_reason", "swap failed" if status == TradeStatus.FAILED else None
            ),
            id=overrides.pop("id", None),
            created_at=overrides.pop("created_at", None),
        )

    return _build


@pytest.fixture
def watched_repo() -> InMemoryWatchedAddressRepository:
    """Fresh in-memory watched address repository per test."""
    return InMemoryWatchedAddressRepository()


@pytest.fixture
def wallet_repo() -> InMemoryManagedWalletRepository:
    """Fresh in-memory managed wallet repository per test."""
    return InMemoryManagedWalletRepository()


@pytest.fixture
def trade_repo() -> InMemoryTradeRepository:
    """Fresh in-memory trade repository per test."""
    return InMemoryTradeRepository()


@pytest.fixture
def gateway() -> AsyncMock:
    """Market gateway double; every interface method is an AsyncMock."""
    return AsyncMock(spec=IMarketGateway)


@pytest.fixture
def fake_bus() -> FakeEventBus:
    return FakeEventBus()
