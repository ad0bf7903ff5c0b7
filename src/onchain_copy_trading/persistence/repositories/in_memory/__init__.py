"""In-memory repository implementations."""

from onchain_copy_trading.persistence.repositories.in_memory.managed_wallet_repository import (
    InMemoryManagedWalletRepository,
)
from onchain_copy_trading.persistence.repositories.in_memory.trade_repository import (
    InMemoryTradeRepository,
)
from onchain_copy_trading.persistence.repositories.in_memory.watched_address_repository import (
    InMemoryWatchedAddressRepository,
)

__all__ = [
    "InMemoryManagedWalletRepository",
    "InMemoryTradeRepository",
    "InMemoryWatchedAddressRepository",
]
