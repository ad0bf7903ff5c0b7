"""Domain models."""

from onchain_copy_trading.models.managed_wallet import ManagedWallet
from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.models.watched_address import WatchedAddress

__all__ = ["ManagedWallet", "Trade", "TradeStatus", "WatchedAddress"]
