# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, sql)."""

from onchain_copy_trading.persistence.repositories.in_memory import (
    InMemoryManagedWalletRepository,
    InMemoryTradeRepository,
    InMemoryWatchedAddressRepository,
)
from onchain_copy_trading.persistence.repositories.interfaces import (
    IManagedWalletRepository,
    ITradeRepository,
    IWatchedAddressRepository,
)
from onchain_copy_trading.persistence.repositories.sql import (
    Database,
    SqlManagedWalletRepository,
    SqlTradeRepository,
    SqlWatchedAddressRepository,
)

__all__ = [
    "IManagedWalletRepository",
    "ITradeRepository",
    "IWatchedAddressRepository",
    "InMemoryManagedWalletRepository",
    "InMemoryTradeRepository",
    "InMemoryWatchedAddressRepository",
    "Database",
    "SqlManagedWalletRepository",
    "SqlTradeRepository",
    "SqlWatchedAddressRepository",
]
