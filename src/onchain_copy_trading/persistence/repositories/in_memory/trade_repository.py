"""In-memory trade repository (keyed by trade id)."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.persistence.repositories.interfaces.trade_repository import (
    ITradeRepository,
)
from onchain_copy_trading.utils.validation import normalize_address

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _by_created_at(trade: Trade) -> datetime:
    """Sort key: created_at (oldest first)."""
    return trade.created_at or _EPOCH


class InMemoryTradeRepository(ITradeRepository):
    """In-memory implementation of ITradeRepository."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[UUID, Trade] = {}

    async def get(self, trade_id: UUID) -> Trade | None:
        return self._store.get(trade_id)

    async def save(self, trade: Trade) -> None:
        self._store[trade.id] = trade

    async def list_all(self) -> list[Trade]:
        return sorted(self._store.values(), key=_by_created_at)

    async def list_by_status(self, status: TradeStatus) -> list[Trade]:
        return sorted(
            (t for t in self._store.values() if t.status == status),
            key=_by_created_at,
        )

    async def list_open_unsold(self) -> list[Trade]:
        return sorted(
            (t for t in self._store.values() if t.is_open and not t.principal_sold),
            key=_by_created_at,
        )

    async def find_non_closed_by_token(self, token_address: str) -> Trade | None:
        token = normalize_address(token_address)
        for t in sorted(self._store.values(), key=_by_created_at):
            if t.buy_token_address == token and not t.is_closed:
                return t
        return None
