# -*- coding: utf-8 -*-
"""Abstract interface for trade storage (in-memory, SQL, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from onchain_copy_trading.models.trade import Trade, TradeStatus


class ITradeRepository(ABC):
    """Interface for persisting Trade records."""

    @abstractmethod
    async def get(self, trade_id: UUID) -> Optional[Trade]:
        """Return the trade by id, or None if missing."""
        ...

    @abstractmethod
    async def save(self, trade: Trade) -> None:
        """Insert or update a trade (by id)."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Trade]:
        """Return every trade, oldest first."""
        ...

    @abstractmethod
    async def list_by_status(self, status: TradeStatus) -> list[Trade]:
        """Return trades with the given status, oldest first."""
        ...

    @abstractmethod
    async def list_open_unsold(self) -> list[Trade]:
        """Return OPEN trades whose principal has not been sold yet, oldest first."""
        ...

    @abstractmethod
    async def find_non_closed_by_token(self, token_address: str) -> Optional[Trade]:
        """Return any OPEN or FAILED trade for the buy token (case-insensitive), or None."""
        ...

    async def list_open(self) -> list[Trade]:
        """Return OPEN trades, oldest first."""
        return await self.list_by_status(TradeStatus.OPEN)
