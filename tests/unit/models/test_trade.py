# -*- coding: utf-8 -*-
"""Unit tests for Trade."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

import pytest

from onchain_copy_trading.models.trade import Trade, TradeStatus


def test_create_normalizes_addresses_and_chain(
    trade_factory: Callable[..., Trade],
) -> None:
    trade = trade_factory(
        chain=" BSC ",
        buy_token_address="0xABCDEF0000000000000000000000000000000001",
        wallet_address="0xAAAA000000000000000000000000000000000002",
    )

    assert trade.chain == "bsc"
    assert trade.buy_token_address == "0xabcdef0000000000000000000000000000000001"
    assert trade.wallet_address == "0xaaaa000000000000000000000000000000000002"
    assert trade.status == TradeStatus.OPEN
    assert trade.principal_sold is False
    assert trade.created_at == trade.updated_at


def test_create_rejects_closed_status(trade_factory: Callable[..., Trade]) -> None:
    with pytest.raises(ValueError, match="CLOSED"):
        trade_factory(status=TradeStatus.CLOSED)


def test_create_requires_reason_for_failed(trade_factory: Callable[..., Trade]) -> None:
    with pytest.raises(ValueError, match="failure_reason"):
        trade_factory(status=TradeStatus.FAILED, failure_reason=None)


def test_cost_basis_is_committed_amount_plus_gas(
    trade_factory: Callable[..., Trade],
    D: Callable[[object], Decimal],
) -> None:
    trade = trade_factory(wallet_exit_amount=D("0.98"), gas_cost=D("0.02"))

    assert trade.cost_basis == D("1.00")


def test_with_principal_sold_keeps_status_open(
    trade_factory: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    trade = trade_factory()

    sold = trade.with_principal_sold("0xsell", now=now_utc)

    assert sold.status == TradeStatus.OPEN
    assert sold.principal_sold is True
    assert sold.principal_sold_tx_hash == "0xsell"
    assert sold.updated_at == now_utc
    assert trade.principal_sold is False


def test_with_closed_transitions_open_to_closed(
    trade_factory: Callable[..., Trade],
    now_utc: datetime,
) -> None:
    closed = trade_factory().with_closed(now=now_utc)

    assert closed.is_closed
    assert not closed.is_open
    assert closed.updated_at == now_utc


def test_failed_trade_cannot_be_closed_or_sold(trade_factory: Callable[..., Trade]) -> None:
    failed = trade_factory(status=TradeStatus.FAILED)

    with pytest.raises(ValueError):
        failed.with_closed()
    with pytest.raises(ValueError):
        failed.with_principal_sold("0xsell")


def test_closed_trade_cannot_be_closed_again(trade_factory: Callable[..., Trade]) -> None:
    closed = trade_factory().with_closed()

    with pytest.raises(ValueError):
        closed.with_closed()
