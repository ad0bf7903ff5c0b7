"""Persistence layer (domain store repositories)."""

from onchain_copy_trading.persistence.repositories import (
    Database,
    IManagedWalletRepository,
    InMemoryManagedWalletRepository,
    InMemoryTradeRepository,
    InMemoryWatchedAddressRepository,
    ITradeRepository,
    IWatchedAddressRepository,
    SqlManagedWalletRepository,
    SqlTradeRepository,
    SqlWatchedAddressRepository,
)

__all__ = [
    "Database",
    "IManagedWalletRepository",
    "ITradeRepository",
    "IWatchedAddressRepository",
    "InMemoryManagedWalletRepository",
    "InMemoryTradeRepository",
    "InMemoryWatchedAddressRepository",
    "SqlManagedWalletRepository",
    "SqlTradeRepository",
    "SqlWatchedAddressRepository",
]
