"""Read-only reporting views."""

from onchain_copy_trading.services.reporting.reporting_service import (
    ReportingService,
    trade_view,
    wallet_view,
    watched_address_view,
)

__all__ = ["ReportingService", "trade_view", "wallet_view", "watched_address_view"]
