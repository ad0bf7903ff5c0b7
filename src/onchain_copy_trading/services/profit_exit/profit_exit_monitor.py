# -*- coding: utf-8 -*-
"""ProfitExitMonitorService: sells back the principal of open trades that reached the profit target."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.events.trade_events import PrincipalSoldEvent
from onchain_copy_trading.exceptions import CopyTradingError
from onchain_copy_trading.services.profit_exit.policy import ProfitExitInput, ProfitExitPolicy
from onchain_copy_trading.services.trade_execution.swap_execution import ApprovalRule
from onchain_copy_trading.utils.chain import get_chain
from onchain_copy_trading.utils.units import from_base_units, gas_fee, to_base_units
from onchain_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from onchain_copy_trading.clients.market_gateway import IMarketGateway
    from onchain_copy_trading.config import Settings
    from onchain_copy_trading.models.trade import Trade
    from onchain_copy_trading.persistence.repositories.interfaces import (
        IManagedWalletRepository,
        ITradeRepository,
    )
    from onchain_copy_trading.services.trade_execution.swap_execution import (
        SwapExecutionService,
    )


@dataclass
class ProfitExitPassResult:
    scanned: int = 0
    principal_sold: int = 0
    errors: int = 0


class ProfitExitMonitorService:
    """Scans OPEN trades whose principal is unsold and exits principal on target."""

    _event_bus: Optional["EventBus"] = None

    def __init__(
        self,
        gateway: "IMarketGateway",
        trade_repository: "ITradeRepository",
        managed_wallet_repository: "IManagedWalletRepository",
        swap_execution: "SwapExecutionService",
        settings: "Settings",
        event_bus: Optional[Any] = None,
        policy: Optional[ProfitExitPolicy] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._gateway = gateway
        self._trade_repo = trade_repository
        self._wallet_repo = managed_wallet_repository
        self._swap = swap_execution
        self._settings = settings
        self._event_bus = event_bus
        self._policy = policy or ProfitExitPolicy()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run_pass(self) -> ProfitExitPassResult:
        """Evaluate every open, unsold trade. Per-trade errors are logged and skipped."""
        result = ProfitExitPassResult()
        for trade in await self._trade_repo.list_open_unsold():
            result.scanned += 1
            try:
                if await self.evaluate_trade(trade):
                    result.principal_sold += 1
            except CopyTradingError as e:
                result.errors += 1
                self._logger.warning(
                    "profit_exit_trade_failed",
                    trade_id=str(trade.id),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            except Exception:
                result.errors += 1
                self._logger.exception("profit_exit_trade_unexpected_error", trade_id=str(trade.id))
        self._logger.info(
            "profit_exit_pass_completed",
            scanned=result.scanned,
            principal_sold=result.principal_sold,
            errors=result.errors,
        )
        return result

    async def evaluate_trade(self, trade: "Trade") -> bool:
        """Sell principal of trade if it reached the target. Returns True if sold."""
        chain = trade.chain
        native = get_chain(chain).native
        token = trade.buy_token_address
        with bound_contextvars(trade_id=str(trade.id), chain=chain, symbol=trade.buy_symbol):
            decimals = trade.buy_token_decimals
            if decimals is None:
                decimals = await self._gateway.token_decimals(chain, token)
            position_units = to_base_units(trade.wallet_buy_amount, decimals)
            if position_units <= 0:
                self._logger.debug("profit_exit_empty_position")
                return False

            value_quote = await self._gateway.quote(chain, token, native.address, position_units)
            current_value = from_base_units(value_quote.to_amount, value_quote.to_token_decimals)
            gas_price = await self._gateway.gas_price(chain)
            exit_gas = gas_fee(gas_price, value_quote.estimated_gas, native.decimals)

            exit_settings = self._settings.exit
            decision = self._policy.evaluate(
                ProfitExitInput(
                    cost_basis=trade.cost_basis,
                    estimated_exit_gas=exit_gas,
                    current_value=current_value,
                    profit_multiple=exit_settings.profit_multiple,
                )
            )
            self._logger.debug(
                "profit_exit_evaluated",
                should_exit=decision.should_exit,
                reason=decision.reason,
            )
            if not decision.should_exit:
                return False

            wallet = await self._wallet_repo.get_enabled(chain, trade.wallet_address)
            if wallet is None:
                self._logger.warning(
                    "profit_exit_wallet_unavailable",
                    wallet_masked=mask_address(trade.wallet_address),
                )
                return False

            principal = exit_settings.principal_sell_multiple * (trade.cost_basis + exit_gas)
            back_quote = await self._gateway.quote(
                chain, native.address, token, to_base_units(principal, native.decimals)
            )
            sell_amount = min(back_quote.to_amount, position_units)
            if sell_amount <= 0:
                self._logger.warning("profit_exit_zero_sell_amount")
                return False

            swap = await self._swap.execute_swap(
                chain,
                wallet,
                token,
                native.address,
                sell_amount,
                approval=ApprovalRule.WHEN_INSUFFICIENT,
            )
            updated = trade.with_principal_sold(swap.tx_hash)
            await self._trade_repo.save(updated)
            self._logger.info(
                "profit_exit_principal_sold",
                tx_hash=swap.tx_hash,
                sell_amount=sell_amount,
                current_value=str(current_value),
                threshold=str(decision.threshold),
            )
            if self._event_bus is not None:
                self._event_bus.dispatch(
                    PrincipalSoldEvent(
                        trade_id=trade.id,
                        chain=chain,
                        wallet_address=trade.wallet_address,
                        token_address=token,
                        symbol=trade.buy_symbol,
                        tx_hash=swap.tx_hash,
                        sell_amount=sell_amount,
                        current_value=current_value,
                        threshold=decision.threshold,
                    )
                )
            return True
