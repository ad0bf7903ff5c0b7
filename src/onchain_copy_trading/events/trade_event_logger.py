# -*- coding: utf-8 -*-
"""TradeEventLogger: subscribes to trade lifecycle events and logs them in one stream."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog

from onchain_copy_trading.events.trade_events import (
    PrincipalSoldEvent,
    TradeClosedEvent,
    TradeFailedEvent,
    TradeOpenedEvent,
)
from onchain_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]


class TradeEventLogger:
    """Logs every trade lifecycle event dispatched on the bus."""

    def __init__(
        self,
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._event_bus: "EventBus" = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def start(self) -> None:
        """Subscribe to all trade lifecycle events."""
        self._event_bus.on(TradeOpenedEvent, self._on_opened)
        self._event_bus.on(TradeFailedEvent, self._on_failed)
        self._event_bus.on(PrincipalSoldEvent, self._on_principal_sold)
        self._event_bus.on(TradeClosedEvent, self._on_closed)
        self._logger.debug("trade_event_logger_started")

    def _on_opened(self, event: TradeOpenedEvent) -> None:
        self._logger.info(
            "trade_opened",
            trade_id=str(event.trade_id),
            chain=event.chain,
            wallet_masked=mask_address(event.wallet_address),
            symbol=event.symbol,
            tx_hash=event.wallet_buy_tx_hash,
            amount=str(event.wallet_buy_amount),
            cost=str(event.wallet_exit_amount + event.gas_cost),
        )

    def _on_failed(self, event: TradeFailedEvent) -> None:
        self._logger.warning(
            "trade_failed",
            trade_id=str(event.trade_id),
            chain=event.chain,
            wallet_masked=mask_address(event.wallet_address),
            symbol=event.symbol,
            reason=event.failure_reason,
        )

    def _on_principal_sold(self, event: PrincipalSoldEvent) -> None:
        self._logger.info(
            "trade_principal_sold",
            trade_id=str(event.trade_id),
            chain=event.chain,
            symbol=event.symbol,
            tx_hash=event.tx_hash,
            current_value=str(event.current_value),
            threshold=str(event.threshold),
        )

    def _on_closed(self, event: TradeClosedEvent) -> None:
        self._logger.info(
            "trade_closed",
            trade_id=str(event.trade_id),
            chain=event.chain,
            symbol=event.symbol,
            residual_value=str(event.residual_value) if event.residual_value is not None else None,
        )
