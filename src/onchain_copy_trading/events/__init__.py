# -*- coding: utf-8 -*-
"""Event bus and trade lifecycle events."""

from onchain_copy_trading.events.bus import build_event_bus
from onchain_copy_trading.events.trade_event_logger import TradeEventLogger
from onchain_copy_trading.events.trade_events import (
    PrincipalSoldEvent,
    TradeClosedEvent,
    TradeFailedEvent,
    TradeOpenedEvent,
)

__all__ = [
    "PrincipalSoldEvent",
    "TradeClosedEvent",
    "TradeEventLogger",
    "TradeFailedEvent",
    "TradeOpenedEvent",
    "build_event_bus",
]
