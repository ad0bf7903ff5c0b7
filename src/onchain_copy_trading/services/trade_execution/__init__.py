"""Trade execution: swap sequencing per wallet and the buy-signal executor."""

from onchain_copy_trading.services.trade_execution.swap_execution import (
    ApprovalRule,
    SwapExecutionResult,
    SwapExecutionService,
)
from onchain_copy_trading.services.trade_execution.trade_executor import TradeExecutorService

__all__ = [
    "ApprovalRule",
    "SwapExecutionResult",
    "SwapExecutionService",
    "TradeExecutorService",
]
