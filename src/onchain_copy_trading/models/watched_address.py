# -*- coding: utf-8 -*-
"""WatchedAddress: an externally chosen address whose swaps are mirrored.

The pipeline only advances the last-seen cursor; creation, enabling and
disabling happen through the management layer.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from onchain_copy_trading.utils.validation import normalize_address


@dataclass(frozen=True, slots=True)
class WatchedAddress:
    """Address under watch on one chain, with the last transaction already evaluated."""

    id: UUID
    chain: str
    address: str
    last_seen_tx_hash: Optional[str]
    """Hash of the most recent transaction already evaluated; never re-evaluated."""
    last_seen_tx_time: Optional[datetime]
    enabled: bool = True

    def with_last_seen(self, tx_hash: str, tx_time: Optional[datetime]) -> WatchedAddress:
        """Return a copy with the cursor advanced to tx_hash."""
        return replace(self, last_seen_tx_hash=tx_hash, last_seen_tx_time=tx_time)

    def has_seen(self, tx_hash: str) -> bool:
        return self.last_seen_tx_hash is not None and self.last_seen_tx_hash == tx_hash

    @classmethod
    def create(
        cls,
        chain: str,
        address: str,
        *,
        enabled: bool = True,
        last_seen_tx_hash: Optional[str] = None,
        last_seen_tx_time: Optional[datetime] = None,
        id: Optional[UUID] = None,
    ) -> WatchedAddress:
        """Create a watched address with an empty (or given) cursor.

        Raises:
            ValueError: If chain or address is empty.
        """
        chain = chain.strip().lower()
        address = normalize_address(address)
        if not chain or not address:
            raise ValueError("chain and address must be non-empty")
        return cls(
            id=id or uuid4(),
            chain=chain,
            address=address,
            last_seen_tx_hash=last_seen_tx_hash,
            last_seen_tx_time=last_seen_tx_time,
            enabled=enabled,
        )
