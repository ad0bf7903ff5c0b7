# -*- coding: utf-8 -*-
"""Unit tests for ProfitExitMonitorService."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock

from onchain_copy_trading.clients.market_gateway.dto import SwapQuote, TxReceipt
from onchain_copy_trading.config import Settings
from onchain_copy_trading.events.trade_events import PrincipalSoldEvent
from onchain_copy_trading.exceptions import TransientGatewayError
from onchain_copy_trading.models.managed_wallet import ManagedWallet
from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.persistence.repositories.in_memory import (
    InMemoryManagedWalletRepository,
    InMemoryTradeRepository,
)
from onchain_copy_trading.services.profit_exit import ProfitExitMonitorService
from onchain_copy_trading.services.trade_execution import ApprovalRule, SwapExecutionResult

WBNB = "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"
ALT = "0x1111111111111111111111111111111111111111"
POSITION_UNITS = 500 * 10**18


class _FakeEventBus:
    def __init__(self) -> None:
        self.dispatched: list[object] = []

    def dispatch(self, event: object) -> None:
        self.dispatched.append(event)


def _value_quote(to_amount: int) -> SwapQuote:
    return SwapQuote(to_amount=to_amount, to_token_decimals=18, estimated_gas=200_000)


def _monitor(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
) -> tuple[ProfitExitMonitorService, AsyncMock, _FakeEventBus]:
    swap = AsyncMock()
    swap.execute_swap.return_value = SwapExecutionResult(
        tx_hash="0xsell",
        submitted_at=datetime(2026, 2, 13, 12, 0),
        receipt=TxReceipt(tx_hash="0xsell", status=1, gas_used=1, effective_gas_price=1),
    )
    bus = _FakeEventBus()
    monitor = ProfitExitMonitorService(gateway, trade_repo, wallet_repo, swap, settings, bus)
    return monitor, swap, bus


def _open_trade(trade_factory: Callable[..., Trade], **overrides: object) -> Trade:
    # cost basis 1.00 native
    return trade_factory(
        buy_token_address=ALT,
        wallet_buy_amount=Decimal("500"),
        wallet_exit_amount=Decimal("0.98"),
        gas_cost=Decimal("0.02"),
        **overrides,
    )


async def test_sells_principal_capped_at_position_when_target_reached(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
    wallet_factory: Callable[..., ManagedWallet],
) -> None:
    wallet = wallet_factory()
    await wallet_repo.save(wallet)
    trade = _open_trade(trade_factory)
    await trade_repo.save(trade)
    # 100 gwei x 200k gas = 0.02 exit gas -> threshold 2 x 1.02 = 2.04
    gateway.gas_price.return_value = 10**11
    gateway.quote.side_effect = [_value_quote(2_040_000_000_000_000_000), _value_quote(600 * 10**18)]
    monitor, swap, bus = _monitor(gateway, trade_repo, wallet_repo, settings)

    result = await monitor.run_pass()

    assert result.scanned == 1
    assert result.principal_sold == 1
    back_quote_call = gateway.quote.await_args_list[1]
    assert back_quote_call.args == ("bsc", WBNB, ALT, 2_040_000_000_000_000_000)
    swap.execute_swap.assert_awaited_once_with(
        "bsc", wallet, ALT, WBNB, POSITION_UNITS, approval=ApprovalRule.WHEN_INSUFFICIENT
    )
    stored = await trade_repo.get(trade.id)
    assert stored is not None
    assert stored.principal_sold is True
    assert stored.principal_sold_tx_hash == "0xsell"
    assert stored.status == TradeStatus.OPEN
    event = bus.dispatched[0]
    assert isinstance(event, PrincipalSoldEvent)
    assert event.sell_amount == POSITION_UNITS
    assert event.threshold == Decimal("2.04")


async def test_sells_quoted_principal_when_below_position(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
    wallet_factory: Callable[..., ManagedWallet],
) -> None:
    await wallet_repo.save(wallet_factory())
    await trade_repo.save(_open_trade(trade_factory))
    gateway.gas_price.return_value = 10**11
    gateway.quote.side_effect = [_value_quote(5 * 10**18), _value_quote(200 * 10**18)]
    monitor, swap, _ = _monitor(gateway, trade_repo, wallet_repo, settings)

    await monitor.run_pass()

    assert swap.execute_swap.await_args.args[4] == 200 * 10**18


async def test_below_threshold_does_nothing(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
    wallet_factory: Callable[..., ManagedWallet],
) -> None:
    await wallet_repo.save(wallet_factory())
    trade = _open_trade(trade_factory)
    await trade_repo.save(trade)
    gateway.gas_price.return_value = 10**11
    gateway.quote.return_value = _value_quote(2_039_999_000_000_000_000)
    monitor, swap, bus = _monitor(gateway, trade_repo, wallet_repo, settings)

    result = await monitor.run_pass()

    assert result.principal_sold == 0
    swap.execute_swap.assert_not_awaited()
    assert bus.dispatched == []
    assert await trade_repo.get(trade.id) == trade


async def test_missing_wallet_skips_trade(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
) -> None:
    await trade_repo.save(_open_trade(trade_factory))
    gateway.gas_price.return_value = 10**11
    gateway.quote.return_value = _value_quote(10 * 10**18)
    monitor, swap, _ = _monitor(gateway, trade_repo, wallet_repo, settings)

    result = await monitor.run_pass()

    assert result.principal_sold == 0
    swap.execute_swap.assert_not_awaited()


async def test_missing_decimals_are_fetched(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
) -> None:
    await trade_repo.save(_open_trade(trade_factory, buy_token_decimals=None))
    gateway.token_decimals.return_value = 9
    gateway.gas_price.return_value = 10**11
    gateway.quote.return_value = _value_quote(0)
    monitor, _, _ = _monitor(gateway, trade_repo, wallet_repo, settings)

    await monitor.run_pass()

    gateway.token_decimals.assert_awaited_once_with("bsc", ALT)
    assert gateway.quote.await_args.args[3] == 500 * 10**9


async def test_errors_are_counted_and_other_trades_still_evaluated(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
) -> None:
    await trade_repo.save(_open_trade(trade_factory))
    await trade_repo.save(_open_trade(trade_factory))
    gateway.gas_price.return_value = 10**11
    gateway.quote.side_effect = [
        TransientGatewayError("aggregator down", url="https://agg.test"),
        _value_quote(0),
    ]
    monitor, _, _ = _monitor(gateway, trade_repo, wallet_repo, settings)

    result = await monitor.run_pass()

    assert result.scanned == 2
    assert result.errors == 1
    assert gateway.quote.await_count == 2


async def test_sold_failed_and_closed_trades_are_not_scanned(
    gateway: AsyncMock,
    trade_repo: InMemoryTradeRepository,
    wallet_repo: InMemoryManagedWalletRepository,
    settings: Settings,
    trade_factory: Callable[..., Trade],
) -> None:
    await trade_repo.save(_open_trade(trade_factory).with_principal_sold("0xsold"))
    await trade_repo.save(_open_trade(trade_factory, status=TradeStatus.FAILED))
    await trade_repo.save(_open_trade(trade_factory).with_closed())
    monitor, _, _ = _monitor(gateway, trade_repo, wallet_repo, settings)

    result = await monitor.run_pass()

    assert result.scanned == 0
    gateway.quote.assert_not_awaited()
