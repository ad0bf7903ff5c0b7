# -*- coding: utf-8 -*-
"""Trade: one mirrored buy, from detection through principal exit to close.

Lifecycle:
    created -> OPEN (execution succeeded) or FAILED (terminal, never retried)
    OPEN -> principal_sold flips True (status stays OPEN)
    OPEN -> CLOSED (residual holding value below the dust threshold)

At most one non-CLOSED trade may exist per buy_token_address; FAILED trades
count as non-closed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from onchain_copy_trading.utils.validation import normalize_address


class TradeStatus(str, Enum):
    """Trade lifecycle state."""

    OPEN = "OPEN"
    FAILED = "FAILED"
    CLOSED = "CLOSED"


@dataclass(frozen=True, slots=True)
class Trade:
    """A mirrored position held by a managed wallet."""

    id: UUID
    chain: str
    watched_address: str
    wallet_address: str

    follow_buy_tx_hash: str
    """Transaction of the watched address that produced the signal."""
    follow_buy_time: Optional[datetime]
    buy_token_address: str
    buy_symbol: str
    follow_buy_amount: Decimal

    status: TradeStatus
    buy_token_decimals: Optional[int] = None
    wallet_buy_tx_hash: Optional[str] = None
    wallet_buy_time: Optional[datetime] = None
    """Submission time of the mirrored swap."""
    wallet_buy_amount: Decimal = Decimal("0")
    """Buy-token amount received, in human units."""
    wallet_exit_amount: Decimal = Decimal("0")
    """Native amount committed to the buy."""
    gas_cost: Decimal = Decimal("0")
    """Native amount paid as gas for the buy."""
    principal_sold: bool = False
    principal_sold_tx_hash: Optional[str] = None
    failure_reason: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status == TradeStatus.OPEN

    @property
    def is_closed(self) -> bool:
        return self.status == TradeStatus.CLOSED

    @property
    def cost_basis(self) -> Decimal:
        """Native amount spent acquiring the position (principal): committed amount + buy gas."""
        return self.wallet_exit_amount + self.gas_cost

    def with_principal_sold(self, tx_hash: str, now: Optional[datetime] = None) -> Trade:
        """Return a copy marked principal_sold. Status stays OPEN.

        Raises:
            ValueError: If the trade is not OPEN.
        """
        if not self.is_open:
            raise ValueError(f"cannot sell principal of a {self.status.value} trade")
        return replace(
            self,
            principal_sold=True,
            principal_sold_tx_hash=tx_hash,
            updated_at=now or datetime.now(timezone.utc),
        )

    def with_closed(self, now: Optional[datetime] = None) -> Trade:
        """Return a copy with status CLOSED.

        Raises:
            ValueError: If the trade is not OPEN.
        """
        if not self.is_open:
            raise ValueError(f"cannot close a {self.status.value} trade")
        return replace(
            self,
            status=TradeStatus.CLOSED,
            updated_at=now or datetime.now(timezone.utc),
        )

    @classmethod
    def create(
        cls,
        *,
        chain: str,
        watched_address: str,
        wallet_address: str,
        follow_buy_tx_hash: str,
        follow_buy_time: Optional[datetime],
        buy_token_address: str,
        buy_symbol: str,
        follow_buy_amount: Decimal,
        status: TradeStatus,
        buy_token_decimals: Optional[int] = None,
        wallet_buy_tx_hash: Optional[str] = None,
        wallet_buy_time: Optional[datetime] = None,
        wallet_buy_amount: Decimal = Decimal("0"),
        wallet_exit_amount: Decimal = Decimal("0"),
        gas_cost: Decimal = Decimal("0"),
        failure_reason: Optional[str] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
    ) -> Trade:
        """Create a new OPEN or FAILED trade record.

        Raises:
            ValueError: If status is CLOSED, or FAILED without a failure_reason.
        """
        if status == TradeStatus.CLOSED:
            raise ValueError("a trade cannot be created CLOSED")
        if status == TradeStatus.FAILED and not failure_reason:
            raise ValueError("failure_reason is required for FAILED trades")
        now = created_at or datetime.now(timezone.utc)
        return cls(
            id=id or uuid4(),
            chain=chain.strip().lower(),
            watched_address=normalize_address(watched_address),
            wallet_address=normalize_address(wallet_address),
            follow_buy_tx_hash=follow_buy_tx_hash,
            follow_buy_time=follow_buy_time,
            buy_token_address=normalize_address(buy_token_address),
            buy_symbol=buy_symbol,
            follow_buy_amount=follow_buy_amount,
            status=status,
            buy_token_decimals=buy_token_decimals,
            wallet_buy_tx_hash=wallet_buy_tx_hash,
            wallet_buy_time=wallet_buy_time,
            wallet_buy_amount=wallet_buy_amount,
            wallet_exit_amount=wallet_exit_amount,
            gas_cost=gas_cost,
            principal_sold=False,
            principal_sold_tx_hash=None,
            failure_reason=failure_reason,
            created_at=now,
            updated_at=now,
        )
