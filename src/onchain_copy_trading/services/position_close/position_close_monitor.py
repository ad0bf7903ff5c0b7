# -*- coding: utf-8 -*-
"""PositionCloseMonitorService: closes open trades whose remaining holding is worth only dust."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.events.trade_events import TradeClosedEvent
from onchain_copy_trading.exceptions import CopyTradingError
from onchain_copy_trading.services.position_close.policy import PositionClosePolicy
from onchain_copy_trading.utils.chain import get_chain
from onchain_copy_trading.utils.units import from_base_units, to_base_units

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from onchain_copy_trading.clients.market_gateway import IMarketGateway
    from onchain_copy_trading.config import Settings
    from onchain_copy_trading.models.trade import Trade
    from onchain_copy_trading.persistence.repositories.interfaces import ITradeRepository


@dataclass
class PositionClosePassResult:
    scanned: int = 0
    closed: int = 0
    errors: int = 0


class PositionCloseMonitorService:
    """Values the managed wallet's remaining holding of each OPEN trade in the stable token.

    A missing or zero holding leaves the trade OPEN: it is not possible to tell
    whether the position was sold elsewhere or the explorer has not indexed it.
    """

    _event_bus: Optional["EventBus"] = None

    def __init__(
        self,
        gateway: "IMarketGateway",
        trade_repository: "ITradeRepository",
        settings: "Settings",
        event_bus: Optional[Any] = None,
        policy: Optional[PositionClosePolicy] = None,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._gateway = gateway
        self._trade_repo = trade_repository
        self._settings = settings
        self._event_bus = event_bus
        self._policy = policy or PositionClosePolicy()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run_pass(self) -> PositionClosePassResult:
        result = PositionClosePassResult()
        for trade in await self._trade_repo.list_open():
            result.scanned += 1
            try:
                if await self.evaluate_trade(trade):
                    result.closed += 1
            except CopyTradingError as e:
                result.errors += 1
                self._logger.warning(
                    "position_close_trade_failed",
                    trade_id=str(trade.id),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            except Exception:
                result.errors += 1
                self._logger.exception("position_close_trade_unexpected_error", trade_id=str(trade.id))
        self._logger.info(
            "position_close_pass_completed",
            scanned=result.scanned,
            closed=result.closed,
            errors=result.errors,
        )
        return result

    async def evaluate_trade(self, trade: "Trade") -> bool:
        """Close trade if its residual value is dust. Returns True if closed."""
        chain = trade.chain
        stable = get_chain(chain).stable
        token = trade.buy_token_address
        with bound_contextvars(trade_id=str(trade.id), chain=chain, symbol=trade.buy_symbol):
            holding = await self._gateway.token_balance(chain, trade.wallet_address, token)
            if holding is None or holding <= 0:
                self._logger.debug("position_close_no_holding", holding=str(holding))
                return False

            decimals = await self._gateway.token_decimals(chain, token)
            quote = await self._gateway.quote(
                chain, token, stable.address, to_base_units(holding, decimals)
            )
            value = from_base_units(quote.to_amount, stable.decimals)
            threshold = self._settings.exit.dust_threshold_usd
            if not self._policy.is_dust(value, threshold):
                self._logger.debug(
                    "position_close_still_held", value=str(value), threshold=str(threshold)
                )
                return False

            await self._trade_repo.save(trade.with_closed())
            self._logger.info(
                "position_close_closed",
                holding=str(holding),
                value=str(value),
                threshold=str(threshold),
            )
            if self._event_bus is not None:
                self._event_bus.dispatch(
                    TradeClosedEvent(
                        trade_id=trade.id,
                        chain=chain,
                        wallet_address=trade.wallet_address,
                        token_address=token,
                        symbol=trade.buy_symbol,
                        residual_value=value,
                    )
                )
            return True
