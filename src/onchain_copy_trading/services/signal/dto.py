"""Signal detector value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True, slots=True)
class BuySignal:
    """A watched address swapped a reference token into buy_token. Handed to the executor."""

    chain: str
    watched_address: str
    tx_hash: str
    tx_time: Optional[datetime]
    token_address: str
    symbol: str
    amount: Decimal
    """Amount of buy_token the watched address received (human units)."""


@dataclass
class DetectionPassResult:
    """Counters of one detection pass (for logging and tests)."""

    addresses_scanned: int = 0
    signals: int = 0
    trades_opened: int = 0
    trades_failed: int = 0
    errors: int = 0
    skipped_duplicates: int = 0
    error_addresses: list[str] = field(default_factory=list)
