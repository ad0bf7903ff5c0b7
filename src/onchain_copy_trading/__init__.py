"""On-chain copy trading: mirrors token buys of watched addresses from managed wallets."""

from onchain_copy_trading.config import get_settings
from onchain_copy_trading.DI import Container
from onchain_copy_trading.services import (
    PassRunner,
    PositionCloseMonitorService,
    ProfitExitMonitorService,
    ReportingService,
    SignalDetectorService,
    TradeExecutorService,
)

__version__ = "0.1.0"
__all__ = [
    "Container",
    "PassRunner",
    "PositionCloseMonitorService",
    "ProfitExitMonitorService",
    "ReportingService",
    "SignalDetectorService",
    "TradeExecutorService",
    "get_settings",
]
