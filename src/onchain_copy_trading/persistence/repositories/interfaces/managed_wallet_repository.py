# -*- coding: utf-8 -*-
"""Abstract interface for managed wallet storage (in-memory, SQL, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from onchain_copy_trading.models.managed_wallet import ManagedWallet


class IManagedWalletRepository(ABC):
    """Interface for persisting ManagedWallet records. The pipeline only reads."""

    @abstractmethod
    async def get(self, wallet_id: UUID) -> Optional[ManagedWallet]:
        """Return the wallet by id, or None if missing."""
        ...

    @abstractmethod
    async def save(self, wallet: ManagedWallet) -> None:
        """Insert or update a wallet (by id). Used by the management layer and tests."""
        ...

    @abstractmethod
    async def list_enabled(self) -> list[ManagedWallet]:
        """Return enabled wallets across all chains, in a stable order."""
        ...

    @abstractmethod
    async def get_enabled(self, chain: str, address: str) -> Optional[ManagedWallet]:
        """Return the enabled wallet for (chain, address), or None."""
        ...
