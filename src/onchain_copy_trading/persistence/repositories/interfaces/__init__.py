# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/ and sql/."""

from onchain_copy_trading.persistence.repositories.interfaces.managed_wallet_repository import (
    IManagedWalletRepository,
)
from onchain_copy_trading.persistence.repositories.interfaces.trade_repository import (
    ITradeRepository,
)
from onchain_copy_trading.persistence.repositories.interfaces.watched_address_repository import (
    IWatchedAddressRepository,
)

__all__ = [
    "IManagedWalletRepository",
    "ITradeRepository",
    "IWatchedAddressRepository",
]
