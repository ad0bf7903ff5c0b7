"""SQL (SQLAlchemy async) repository implementations."""

from onchain_copy_trading.persistence.repositories.sql.database import Database
from onchain_copy_trading.persistence.repositories.sql.managed_wallet_repository import (
    SqlManagedWalletRepository,
)
from onchain_copy_trading.persistence.repositories.sql.trade_repository import SqlTradeRepository
from onchain_copy_trading.persistence.repositories.sql.watched_address_repository import (
    SqlWatchedAddressRepository,
)

__all__ = [
    "Database",
    "SqlManagedWalletRepository",
    "SqlTradeRepository",
    "SqlWatchedAddressRepository",
]
