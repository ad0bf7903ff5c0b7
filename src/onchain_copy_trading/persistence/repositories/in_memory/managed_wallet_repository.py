"""In-memory managed wallet repository (keyed by id)."""

from __future__ import annotations

from uuid import UUID

from onchain_copy_trading.models.managed_wallet import ManagedWallet
from onchain_copy_trading.persistence.repositories.interfaces.managed_wallet_repository import (
    IManagedWalletRepository,
)
from onchain_copy_trading.utils.validation import normalize_address


class InMemoryManagedWalletRepository(IManagedWalletRepository):
    """In-memory implementation of IManagedWalletRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[UUID, ManagedWallet] = {}

    async def get(self, wallet_id: UUID) -> ManagedWallet | None:
        return self._store.get(wallet_id)

    async def save(self, wallet: ManagedWallet) -> None:
        self._store[wallet.id] = wallet

    async def list_enabled(self) -> list[ManagedWallet]:
        """Return enabled wallets ordered by (chain, address)."""
        return sorted(
            (w for w in self._store.values() if w.enabled),
            key=lambda w: (w.chain, w.address),
        )

    async def get_enabled(self, chain: str, address: str) -> ManagedWallet | None:
        chain = chain.strip().lower()
        address = normalize_address(address)
        for w in self._store.values():
            if w.enabled and w.chain == chain and w.address == address:
                return w
        return None
