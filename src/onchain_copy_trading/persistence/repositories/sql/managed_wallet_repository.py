# -*- coding: utf-8 -*-
"""SQL managed wallet repository."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select

from onchain_copy_trading.models.managed_wallet import ManagedWallet
from onchain_copy_trading.persistence.repositories.interfaces.managed_wallet_repository import (
    IManagedWalletRepository,
)
from onchain_copy_trading.persistence.repositories.sql.database import Database
from onchain_copy_trading.persistence.repositories.sql.orm import ManagedWalletModel
from onchain_copy_trading.utils.validation import normalize_address


def _to_domain(row: ManagedWalletModel) -> ManagedWallet:
    return ManagedWallet(
        id=UUID(row.id),
        chain=row.chain,
        address=row.address,
        secret_key=row.secret_key,
        fixed_exit_amount=row.fixed_exit_amount,
        enabled=row.enabled,
    )


class SqlManagedWalletRepository(IManagedWalletRepository):
    """IManagedWalletRepository backed by SQLAlchemy (async)."""

    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, wallet_id: UUID) -> Optional[ManagedWallet]:
        async with self._db.session() as session:
            row = await session.get(ManagedWalletModel, str(wallet_id))
            return _to_domain(row) if row is not None else None

    async def save(self, wallet: ManagedWallet) -> None:
        async with self._db.session() as session:
            await session.merge(
                ManagedWalletModel(
                    id=str(wallet.id),
                    chain=wallet.chain,
                    address=wallet.address,
                    secret_key=wallet.secret_key,
                    fixed_exit_amount=wallet.fixed_exit_amount,
                    enabled=wallet.enabled,
                )
            )

    async def list_enabled(self) -> list[ManagedWallet]:
        stmt = (
            select(ManagedWalletModel)
            .where(ManagedWalletModel.enabled.is_(True))
            .order_by(ManagedWalletModel.chain, ManagedWalletModel.address)
        )
        async with self._db.session() as session:
            return [_to_domain(r) for r in (await session.scalars(stmt)).all()]

    async def get_enabled(self, chain: str, address: str) -> Optional[ManagedWallet]:
        stmt = select(ManagedWalletModel).where(
            ManagedWalletModel.enabled.is_(True),
            ManagedWalletModel.chain == chain.strip().lower(),
            ManagedWalletModel.address == normalize_address(address),
        )
        async with self._db.session() as session:
            row = (await session.scalars(stmt)).first()
            return _to_domain(row) if row is not None else None
