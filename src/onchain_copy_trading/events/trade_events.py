# -*- coding: utf-8 -*-
"""Trade lifecycle events (bubus BaseEvent), dispatched by the pipeline services."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from uuid import UUID

from bubus import BaseEvent  # type: ignore[import-untyped]


class TradeOpenedEvent(BaseEvent[None]):
    """Emitted when a mirrored buy confirmed and an OPEN trade was saved."""

    trade_id: UUID
    chain: str
    watched_address: str
    wallet_address: str
    token_address: str
    symbol: str
    wallet_buy_tx_hash: str
    wallet_buy_amount: Decimal
    wallet_exit_amount: Decimal
    gas_cost: Decimal


class TradeFailedEvent(BaseEvent[None]):
    """Emitted when a mirrored buy failed and a FAILED trade was saved."""

    trade_id: UUID
    chain: str
    watched_address: str
    wallet_address: str
    token_address: str
    symbol: str
    failure_reason: str
    wallet_buy_tx_hash: Optional[str] = None


class PrincipalSoldEvent(BaseEvent[None]):
    """Emitted when the profit-exit monitor sold the principal back to native."""

    trade_id: UUID
    chain: str
    wallet_address: str
    token_address: str
    symbol: str
    tx_hash: str
    sell_amount: int
    """Base units of the buy token sold."""
    current_value: Decimal
    threshold: Decimal


class TradeClosedEvent(BaseEvent[None]):
    """Emitted when the residual holding fell to dust and the trade was closed."""

    trade_id: UUID
    chain: str
    wallet_address: str
    token_address: str
    symbol: str
    residual_value: Optional[Decimal] = None
