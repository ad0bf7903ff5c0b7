# -*- coding: utf-8 -*-
"""Unit tests for the SQLAlchemy repositories on in-memory SQLite."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import datetime, timedelta

import pytest

from onchain_copy_trading.models.managed_wallet import ManagedWallet
from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.models.watched_address import WatchedAddress
from onchain_copy_trading.persistence.repositories.sql import (
    Database,
    SqlManagedWalletRepository,
    SqlTradeRepository,
    SqlWatchedAddressRepository,
)


@pytest.fixture
async def database() -> AsyncIterator[Database]:
    db = Database("sqlite+aiosqlite:///:memory:")
    await db.init_schema()
    yield db
    await db.dispose()


async def test_trade_roundtrip_keeps_decimals_and_datetimes(
    database: Database,
    trade_factory: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    repo = SqlTradeRepository(database)
    trade = trade_factory(created_at=now_utc, follow_buy_time=now_utc, wallet_buy_time=now_utc)

    await repo.save(trade)
    loaded = await repo.get(trade.id)

    assert loaded == trade


async def test_trade_save_updates_existing_row(
    database: Database,
    trade_factory: Callable[..., Trade],
) -> None:
    repo = SqlTradeRepository(database)
    trade = trade_factory()
    await repo.save(trade)

    await repo.save(trade.with_principal_sold("0xsell"))

    assert [t.principal_sold for t in await repo.list_all()] == [True]
    assert await repo.list_open_unsold() == []


async def test_trade_queries_filter_by_status_and_token(
    database: Database,
    trade_factory: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    repo = SqlTradeRepository(database)
    token_a = "0x" + "a" * 40
    token_b = "0x" + "b" * 40
    open_a = trade_factory(buy_token_address=token_a, created_at=now_utc)
    failed_b = trade_factory(
        buy_token_address=token_b,
        status=TradeStatus.FAILED,
        created_at=now_utc + timedelta(seconds=1),
    )
    closed_b = trade_factory(
        buy_token_address=token_b, created_at=now_utc + timedelta(seconds=2)
    ).with_closed()
    for t in (open_a, failed_b, closed_b):
        await repo.save(t)

    assert [t.id for t in await repo.list_open()] == [open_a.id]
    assert [t.id for t in await repo.list_by_status(TradeStatus.CLOSED)] == [closed_b.id]
    found = await repo.find_non_closed_by_token(token_b.upper().replace("0X", "0x"))
    assert found is not None and found.id == failed_b.id
    assert [t.id for t in await repo.list_all()] == [open_a.id, failed_b.id, closed_b.id]


async def test_watched_address_cursor_is_persisted(
    database: Database,
    watched_factory: Callable[..., WatchedAddress],
    now_utc: datetime,
) -> None:
    repo = SqlWatchedAddressRepository(database)
    watched = watched_factory()
    await repo.save(watched)

    await repo.advance_last_seen(watched.id, "0xtx", now_utc)

    enabled = await repo.list_enabled()
    assert len(enabled) == 1
    assert enabled[0].last_seen_tx_hash == "0xtx"
    assert enabled[0].last_seen_tx_time == now_utc


async def test_managed_wallet_get_enabled(
    database: Database,
    wallet_factory: Callable[..., ManagedWallet],
    wallet_address: str,
) -> None:
    repo = SqlManagedWalletRepository(database)
    wallet = wallet_factory()
    disabled = wallet_factory(address="0x" + "5" * 40, enabled=False)
    await repo.save(wallet)
    await repo.save(disabled)

    loaded = await repo.get_enabled("bsc", wallet_address)

    assert loaded == wallet
    assert loaded is not None and loaded.secret_key == wallet.secret_key
    assert [w.id for w in await repo.list_enabled()] == [wallet.id]
