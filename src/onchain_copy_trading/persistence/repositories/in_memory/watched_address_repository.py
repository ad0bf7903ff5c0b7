"""In-memory watched address repository (keyed by id)."""

from __future__ import annotations

from uuid import UUID

from onchain_copy_trading.models.watched_address import WatchedAddress
from onchain_copy_trading.persistence.repositories.interfaces.watched_address_repository import (
    IWatchedAddressRepository,
)


def _by_chain_address(watched: WatchedAddress) -> tuple[str, str]:
    return (watched.chain, watched.address)


class InMemoryWatchedAddressRepository(IWatchedAddressRepository):
    """In-memory implementation of IWatchedAddressRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[UUID, WatchedAddress] = {}

    async def get(self, address_id: UUID) -> WatchedAddress | None:
        return self._store.get(address_id)

    async def save(self, watched: WatchedAddress) -> None:
        self._store[watched.id] = watched

    async def list_enabled(self) -> list[WatchedAddress]:
        return sorted((w for w in self._store.values() if w.enabled), key=_by_chain_address)

    async def list_all(self) -> list[WatchedAddress]:
        return sorted(self._store.values(), key=_by_chain_address)
