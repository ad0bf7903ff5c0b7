"""Position close: dust policy and the monitor pass."""

from onchain_copy_trading.services.position_close.policy import PositionClosePolicy
from onchain_copy_trading.services.position_close.position_close_monitor import (
    PositionCloseMonitorService,
    PositionClosePassResult,
)

__all__ = ["PositionCloseMonitorService", "PositionClosePassResult", "PositionClosePolicy"]
