"""Profit exit: pure policy and the monitor pass."""

from onchain_copy_trading.services.profit_exit.policy import (
    ProfitExitDecision,
    ProfitExitInput,
    ProfitExitPolicy,
)
from onchain_copy_trading.services.profit_exit.profit_exit_monitor import (
    ProfitExitMonitorService,
    ProfitExitPassResult,
)

__all__ = [
    "ProfitExitDecision",
    "ProfitExitInput",
    "ProfitExitMonitorService",
    "ProfitExitPassResult",
    "ProfitExitPolicy",
]
