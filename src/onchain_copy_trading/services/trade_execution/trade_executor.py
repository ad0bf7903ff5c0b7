# -*- coding: utf-8 -*-
"""TradeExecutorService: mirrors one buy signal from a managed wallet.

Picks a wallet on the signal's chain, quotes the native spend into the buy
token, runs the swap and saves exactly one Trade: OPEN on success, FAILED
with a readable reason otherwise.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.events.trade_events import TradeFailedEvent, TradeOpenedEvent
from onchain_copy_trading.exceptions import ConfigurationError, CopyTradingError, ExecutionError
from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.services.trade_execution.swap_execution import ApprovalRule
from onchain_copy_trading.utils.chain import get_chain
from onchain_copy_trading.utils.units import from_base_units, gas_fee, to_base_units
from onchain_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from onchain_copy_trading.clients.market_gateway import IMarketGateway
    from onchain_copy_trading.models.managed_wallet import ManagedWallet
    from onchain_copy_trading.persistence.repositories.interfaces import ITradeRepository
    from onchain_copy_trading.services.signal.dto import BuySignal
    from onchain_copy_trading.services.trade_execution.swap_execution import (
        SwapExecutionService,
    )

WalletChooser = Callable[[Sequence["ManagedWallet"]], "ManagedWallet"]


class TradeExecutorService:
    """Executes buy signals and records the outcome as a Trade."""

    _event_bus: Optional["EventBus"] = None

    def __init__(
        self,
        gateway: "IMarketGateway",
        trade_repository: "ITradeRepository",
        swap_execution: "SwapExecutionService",
        event_bus: Optional[Any] = None,
        chooser: Optional[WalletChooser] = None,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the executor.

        Args:
            gateway: Market gateway (quotes).
            trade_repository: Where the resulting Trade is saved.
            swap_execution: Runs allowance/approval/swap/receipt for the chosen wallet.
            event_bus: Optional; if set, emits TradeOpenedEvent / TradeFailedEvent.
            chooser: Picks one wallet among the candidates; defaults to random.choice.
            clock: Returns the current UTC time.
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._gateway = gateway
        self._trade_repo = trade_repository
        self._swap = swap_execution
        self._event_bus = event_bus
        self._chooser: WalletChooser = chooser or random.choice
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def choose_wallet(
        self,
        chain: str,
        wallets: Sequence["ManagedWallet"],
    ) -> "ManagedWallet":
        """Pick uniformly among the enabled wallets on chain.

        Raises:
            ConfigurationError: If no enabled wallet exists on chain.
        """
        candidates = [w for w in wallets if w.enabled and w.chain == chain]
        if not candidates:
            raise ConfigurationError(f"no enabled managed wallet on chain {chain!r}")
        return self._chooser(candidates)

    async def execute(
        self,
        signal: "BuySignal",
        wallets: Sequence["ManagedWallet"],
    ) -> Trade:
        """Mirror signal and return the saved Trade (OPEN or FAILED).

        Raises:
            ConfigurationError: If no wallet is available for the signal's chain or
                the chain is unsupported. No Trade is saved in that case.
        """
        wallet = self.choose_wallet(signal.chain, wallets)
        chain_info = get_chain(signal.chain)
        native = chain_info.native
        spend = to_base_units(wallet.fixed_exit_amount, native.decimals)

        buy_token_decimals: Optional[int] = None
        wallet_buy_amount = Decimal("0")
        swap_tx_hash: Optional[str] = None

        with bound_contextvars(
            chain=signal.chain,
            signal_tx_hash=signal.tx_hash,
            wallet_masked=mask_address(wallet.address),
            symbol=signal.symbol,
        ):
            try:
                quote = await self._gateway.quote(
                    signal.chain, native.address, signal.token_address, spend
                )
                buy_token_decimals = quote.to_token_decimals
                wallet_buy_amount = from_base_units(quote.to_amount, quote.to_token_decimals)

                result = await self._swap.execute_swap(
                    signal.chain,
                    wallet,
                    native.address,
                    signal.token_address,
                    spend,
                    approval=ApprovalRule.WHEN_ZERO,
                )
            except CopyTradingError as e:
                if isinstance(e, ExecutionError) and e.stage == "swap":
                    swap_tx_hash = e.tx_hash
                self._logger.warning(
                    "trade_execution_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                return await self._save_failed(
                    signal, wallet, str(e) or type(e).__name__,
                    buy_token_decimals=buy_token_decimals,
                    wallet_buy_amount=wallet_buy_amount,
                    wallet_buy_tx_hash=swap_tx_hash,
                )
            except Exception as e:
                self._logger.exception("trade_execution_unexpected_error")
                return await self._save_failed(
                    signal, wallet, f"unexpected error: {type(e).__name__}: {e}",
                    buy_token_decimals=buy_token_decimals,
                    wallet_buy_amount=wallet_buy_amount,
                    wallet_buy_tx_hash=swap_tx_hash,
                )

            receipt = result.receipt
            gas_cost = gas_fee(receipt.effective_gas_price, receipt.gas_used, native.decimals)
            trade = Trade.create(
                chain=signal.chain,
                watched_address=signal.watched_address,
                wallet_address=wallet.address,
                follow_buy_tx_hash=signal.tx_hash,
                follow_buy_time=signal.tx_time,
                buy_token_address=signal.token_address,
                buy_symbol=signal.symbol,
                follow_buy_amount=signal.amount,
                status=TradeStatus.OPEN,
                buy_token_decimals=buy_token_decimals,
                wallet_buy_tx_hash=result.tx_hash,
                wallet_buy_time=result.submitted_at,
                wallet_buy_amount=wallet_buy_amount,
                wallet_exit_amount=wallet.fixed_exit_amount,
                gas_cost=gas_cost,
                created_at=self._clock(),
            )
            await self._trade_repo.save(trade)
            self._logger.info(
                "trade_execution_opened",
                trade_id=str(trade.id),
                tx_hash=result.tx_hash,
                wallet_buy_amount=str(wallet_buy_amount),
                gas_cost=str(gas_cost),
            )
            if self._event_bus is not None:
                self._event_bus.dispatch(
                    TradeOpenedEvent(
                        trade_id=trade.id,
                        chain=trade.chain,
                        watched_address=trade.watched_address,
                        wallet_address=trade.wallet_address,
                        token_address=trade.buy_token_address,
                        symbol=trade.buy_symbol,
                        wallet_buy_tx_hash=result.tx_hash,
                        wallet_buy_amount=trade.wallet_buy_amount,
                        wallet_exit_amount=trade.wallet_exit_amount,
                        gas_cost=trade.gas_cost,
                    )
                )
            return trade

    async def _save_failed(
        self,
        signal: "BuySignal",
        wallet: "ManagedWallet",
        reason: str,
        *,
        buy_token_decimals: Optional[int],
        wallet_buy_amount: Decimal,
        wallet_buy_tx_hash: Optional[str],
    ) -> Trade:
        trade = Trade.create(
            chain=signal.chain,
            watched_address=signal.watched_address,
            wallet_address=wallet.address,
            follow_buy_tx_hash=signal.tx_hash,
            follow_buy_time=signal.tx_time,
            buy_token_address=signal.token_address,
            buy_symbol=signal.symbol,
            follow_buy_amount=signal.amount,
            status=TradeStatus.FAILED,
            buy_token_decimals=buy_token_decimals,
            wallet_buy_tx_hash=wallet_buy_tx_hash,
            wallet_buy_amount=wallet_buy_amount,
            wallet_exit_amount=wallet.fixed_exit_amount,
            failure_reason=reason,
            created_at=self._clock(),
        )
        await self._trade_repo.save(trade)
        if self._event_bus is not None:
            self._event_bus.dispatch(
                TradeFailedEvent(
                    trade_id=trade.id,
                    chain=trade.chain,
                    watched_address=trade.watched_address,
                    wallet_address=trade.wallet_address,
                    token_address=trade.buy_token_address,
                    symbol=trade.buy_symbol,
                    failure_reason=reason,
                    wallet_buy_tx_hash=wallet_buy_tx_hash,
                )
            )
        return trade
