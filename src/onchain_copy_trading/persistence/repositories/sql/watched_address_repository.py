# -*- coding: utf-8 -*-
"""SQL watched address repository."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select

from onchain_copy_trading.models.watched_address import WatchedAddress
from onchain_copy_trading.persistence.repositories.interfaces.watched_address_repository import (
    IWatchedAddressRepository,
)
from onchain_copy_trading.persistence.repositories.sql.database import Database
from onchain_copy_trading.persistence.repositories.sql.orm import WatchedAddressModel


def _to_domain(row: WatchedAddressModel) -> WatchedAddress:
    return WatchedAddress(
        id=UUID(row.id),
        chain=row.chain,
        address=row.address,
        last_seen_tx_hash=row.last_seen_tx_hash,
        last_seen_tx_time=row.last_seen_tx_time,
        enabled=row.enabled,
    )


def _to_row(watched: WatchedAddress) -> WatchedAddressModel:
    return WatchedAddressModel(
        id=str(watched.id),
        chain=watched.chain,
        address=watched.address,
        last_seen_tx_hash=watched.last_seen_tx_hash,
        last_seen_tx_time=watched.last_seen_tx_time,
        enabled=watched.enabled,
    )


class SqlWatchedAddressRepository(IWatchedAddressRepository):
    """IWatchedAddressRepository backed by SQLAlchemy (async)."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, address_id: UUID) -> Optional[WatchedAddress]:
        async with self._db.session() as session:
            row = await session.get(WatchedAddressModel, str(address_id))
            return _to_domain(row) if row is not None else None

    async def save(self, watched: WatchedAddress) -> None:
        async with self._db.session() as session:
            await session.merge(_to_row(watched))

    async def list_enabled(self) -> list[WatchedAddress]:
        stmt = (
            select(WatchedAddressModel)
            .where(WatchedAddressModel.enabled.is_(True))
            .order_by(WatchedAddressModel.chain, WatchedAddressModel.address)
        )
        async with self._db.session() as session:
            rows = (await session.scalars(stmt)).all()
            return [_to_domain(r) for r in rows]

    async def list_all(self) -> list[WatchedAddress]:
        stmt = select(WatchedAddressModel).order_by(
            WatchedAddressModel.chain, WatchedAddressModel.address
        )
        async with self._db.session() as session:
            rows = (await session.scalars(stmt)).all()
            return [_to_domain(r) for r in rows]
