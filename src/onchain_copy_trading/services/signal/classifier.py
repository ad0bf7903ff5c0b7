"""Classification of a transaction's transfer legs into a trade direction.

No I/O. The first leg is what the watched address gave up, the last leg is
what it received. Only a reference -> non-reference swap is a buy signal.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from onchain_copy_trading.clients.market_gateway.dto import TransferLeg


class LegKind(str, Enum):
    NO_LEGS = "NO_LEGS"
    NFT_TRANSFER = "NFT_TRANSFER"
    ALT_TO_ALT = "ALT_TO_ALT"
    REFERENCE_TO_REFERENCE = "REFERENCE_TO_REFERENCE"
    SELL = "SELL"
    BUY = "BUY"


@dataclass(frozen=True)
class LegClassification:
    """Result of classify_legs: the kind plus the legs it was decided on."""

    kind: LegKind
    sell_leg: Optional[TransferLeg] = None
    buy_leg: Optional[TransferLeg] = None

    @property
    def is_buy(self) -> bool:
        return self.kind == LegKind.BUY


def classify_legs(
    legs: Sequence[TransferLeg],
    reference_symbols: Iterable[str],
) -> LegClassification:
    """Classify legs against the reference (native/stable) symbol set.

    Rules, first match wins:
    - no legs: NO_LEGS
    - both legs carry a token id: NFT_TRANSFER
    - neither symbol is a reference: ALT_TO_ALT
    - both symbols are references: REFERENCE_TO_REFERENCE
    - the received symbol is a reference: SELL
    - otherwise: BUY

    A single leg is both the sold and the bought leg, so it never yields BUY.
    Symbols compare case-insensitively.
    """
    if not legs:
        return LegClassification(kind=LegKind.NO_LEGS)

    refs = {s.strip().upper() for s in reference_symbols}
    sell_leg, buy_leg = legs[0], legs[-1]

    if sell_leg.is_nft and buy_leg.is_nft:
        kind = LegKind.NFT_TRANSFER
    else:
        sell_is_ref = sell_leg.symbol.strip().upper() in refs
        buy_is_ref = buy_leg.symbol.strip().upper() in refs
        if not sell_is_ref and not buy_is_ref:
            kind = LegKind.ALT_TO_ALT
        elif sell_is_ref and buy_is_ref:
            kind = LegKind.REFERENCE_TO_REFERENCE
        elif buy_is_ref:
            kind = LegKind.SELL
        else:
            kind = LegKind.BUY
    return LegClassification(kind=kind, sell_leg=sell_leg, buy_leg=buy_leg)
