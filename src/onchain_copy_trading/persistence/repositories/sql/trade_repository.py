# -*- coding: utf-8 -*-
"""SQL trade repository."""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select

from onchain_copy_trading.models.trade import Trade, TradeStatus
from onchain_copy_trading.persistence.repositories.interfaces.trade_repository import (
    ITradeRepository,
)
from onchain_copy_trading.persistence.repositories.sql.database import Database
from onchain_copy_trading.persistence.repositories.sql.orm import TradeModel
from onchain_copy_trading.utils.validation import normalize_address

_COLUMNS = (
    "chain",
    "watched_address",
    "wallet_address",
    "follow_buy_tx_hash",
    "follow_buy_time",
    "buy_token_address",
    "buy_symbol",
    "follow_buy_amount",
    "buy_token_decimals",
    "wallet_buy_tx_hash",
    "wallet_buy_time",
    "wallet_buy_amount",
    "wallet_exit_amount",
    "gas_cost",
    "principal_sold",
    "principal_sold_tx_hash",
    "failure_reason",
    "created_at",
    "updated_at",
)


def _to_domain(row: TradeModel) -> Trade:
    values: dict[str, Any] = {name: getattr(row, name) for name in _COLUMNS}
    return Trade(id=UUID(row.id), status=TradeStatus(row.status), **values)


def _to_row(trade: Trade) -> TradeModel:
    values: dict[str, Any] = {name: getattr(trade, name) for name in _COLUMNS}
    return TradeModel(id=str(trade.id), status=trade.status.value, **values)


class SqlTradeRepository(ITradeRepository):
    """ITradeRepository backed by SQLAlchemy (async). Lists are ordered oldest first."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def _select(self, *where: Any) -> list[Trade]:
        stmt = select(TradeModel).where(*where).order_by(TradeModel.created_at, TradeModel.id)
        async with self._db.session() as session:
            return [_to_domain(r) for r in (await session.scalars(stmt)).all()]

    async def get(self, trade_id: UUID) -> Optional[Trade]:
        async with self._db.session() as session:
            row = await session.get(TradeModel, str(trade_id))
            return _to_domain(row) if row is not None else None

    async def save(self, trade: Trade) -> None:
        async with self._db.session() as session:
            await session.merge(_to_row(trade))

    async def list_all(self) -> list[Trade]:
        return await self._select()

    async def list_by_status(self, status: TradeStatus) -> list[Trade]:
        return await self._select(TradeModel.status == status.value)

    async def list_open_unsold(self) -> list[Trade]:
        return await self._select(
            TradeModel.status == TradeStatus.OPEN.value,
            TradeModel.principal_sold.is_(False),
        )

    async def find_non_closed_by_token(self, token_address: str) -> Optional[Trade]:
        found = await self._select(
            TradeModel.buy_token_address == normalize_address(token_address),
            TradeModel.status != TradeStatus.CLOSED.value,
        )
        return found[0] if found else None
