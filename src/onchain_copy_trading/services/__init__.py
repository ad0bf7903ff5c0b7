"""Pipeline services: signal detection, trade execution, exit monitors, reporting, runner."""

from onchain_copy_trading.services.pass_runner import PassRunner
from onchain_copy_trading.services.position_close import PositionCloseMonitorService
from onchain_copy_trading.services.profit_exit import ProfitExitMonitorService
from onchain_copy_trading.services.reporting import ReportingService
from onchain_copy_trading.services.signal import SignalDetectorService
from onchain_copy_trading.services.trade_execution import (
    SwapExecutionService,
    TradeExecutorService,
)

__all__ = [
    "PassRunner",
    "PositionCloseMonitorService",
    "ProfitExitMonitorService",
    "ReportingService",
    "SignalDetectorService",
    "SwapExecutionService",
    "TradeExecutorService",
]
