# -*- coding: utf-8 -*-
"""Abstract interface for watched address storage (in-memory, SQL, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from onchain_copy_trading.models.watched_address import WatchedAddress


class IWatchedAddressRepository(ABC):
    """Interface for persisting WatchedAddress records."""

    @abstractmethod
    async def get(self, address_id: UUID) -> Optional[WatchedAddress]:
        """Return the watched address by id, or None if missing."""
        ...

    @abstractmethod
    async def save(self, watched: WatchedAddress) -> None:
        """Insert or update a watched address (by id)."""
        ...

    @abstractmethod
    async def list_enabled(self) -> list[WatchedAddress]:
        """Return enabled watched addresses, in a stable order."""
        ...

    @abstractmethod
    async def list_all(self) -> list[WatchedAddress]:
        """Return all watched addresses (any state)."""
        ...

    async def advance_last_seen(
        self,
        address_id: UUID,
        tx_hash: str,
        tx_time: datetime | None,
    ) -> Optional[WatchedAddress]:
        """Load by id, move the cursor to tx_hash, save and return updated. None if not found."""
        watched = await self.get(address_id)
        if watched is None:
            return None
        updated = watched.with_last_seen(tx_hash, tx_time)
        await self.save(updated)
        return updated
