"""Value objects exchanged with the market gateway."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class LatestTransaction:
    """Most recent token-transfer transaction of an address."""

    tx_hash: str
    timestamp: Optional[datetime]


@dataclass(frozen=True, slots=True)
class TransferLeg:
    """One token transfer inside a transaction. amount is the raw decimal string."""

    from_address: str
    to_address: str
    token_address: str
    symbol: str
    token_id: str
    amount: str

    @property
    def is_nft(self) -> bool:
        return bool(self.token_id)


@dataclass(frozen=True, slots=True)
class SwapQuote:
    """Aggregator quote. to_amount is in base units of the destination token."""

    to_amount: int
    to_token_decimals: int
    estimated_gas: int


@dataclass(frozen=True, slots=True)
class SwapParams:
    from_token: str
    to_token: str
    amount: int
    """Base units of from_token."""
    from_address: str
    slippage_percent: float


@dataclass(frozen=True, slots=True)
class UnsignedTx:
    """Transaction ready to be signed. value, gas_price and gas are integers (wei, units)."""

    chain: str
    from_address: str
    to: str
    data: str
    value: int
    gas_price: int
    gas: Optional[int] = None


@dataclass(frozen=True, slots=True)
class TxReceipt:
    tx_hash: str
    status: int
    """1 success, 0 reverted."""
    gas_used: int
    effective_gas_price: int

    @property
    def succeeded(self) -> bool:
        return self.status == 1
