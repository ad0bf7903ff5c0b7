# -*- coding: utf-8 -*-
"""SQLAlchemy table models for watched addresses, managed wallets and trades."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class DecimalString(TypeDecorator[Decimal]):
    """Decimal persisted as its exact string form (SQLite has no fixed-point type)."""

    impl = String(78)
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect: Any) -> Optional[str]:
        return None if value is None else str(value)

    def process_result_value(self, value: Optional[str], dialect: Any) -> Optional[Decimal]:
        return None if value is None else Decimal(value)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime stored as naive UTC and returned with tzinfo=UTC."""

    impl = DateTime()
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        return None if value is None else value.replace(tzinfo=timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class WatchedAddressModel(Base):
    __tablename__ = "watched_addresses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    chain: Mapped[str] = mapped_column(String(16), nullable=False)
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    last_seen_tx_hash: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    last_seen_tx_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (UniqueConstraint("chain", "address", name="uq_watched_chain_address"),)


class ManagedWalletModel(Base):
    __tablename__ = "managed_wallets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    chain: Mapped[str] = mapped_column(String(16), nullable=False)
    address: Mapped[str] = mapped_column(String(42), nullable=False)
    secret_key: Mapped[str] = mapped_column(Text, nullable=False)
    fixed_exit_amount: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (UniqueConstraint("chain", "address", name="uq_wallet_chain_address"),)


class TradeModel(Base):
    __tablename__ = "trades"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    chain: Mapped[str] = mapped_column(String(16), nullable=False)
    watched_address: Mapped[str] = mapped_column(String(42), nullable=False)
    wallet_address: Mapped[str] = mapped_column(String(42), nullable=False)

    follow_buy_tx_hash: Mapped[str] = mapped_column(String(80), nullable=False)
    follow_buy_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    buy_token_address: Mapped[str] = mapped_column(String(42), nullable=False)
    buy_symbol: Mapped[str] = mapped_column(String(64), nullable=False)
    follow_buy_amount: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    buy_token_decimals: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    status: Mapped[str] = mapped_column(String(8), nullable=False)
    wallet_buy_tx_hash: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    wallet_buy_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    wallet_buy_amount: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    wallet_exit_amount: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    gas_cost: Mapped[Decimal] = mapped_column(DecimalString, nullable=False)
    principal_sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    principal_sold_tx_hash: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    failure_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    updated_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)

    __table_args__ = (
        Index("idx_trades_status", "status"),
        Index("idx_trades_buy_token", "buy_token_address"),
        Index("idx_trades_created_at", "created_at"),
    )
