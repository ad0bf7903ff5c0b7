"""ProfitExitPolicy: pure logic deciding when a position has multiplied enough to sell principal.

No I/O. Fires when current value >= profit_multiple x (cost basis + estimated exit gas).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProfitExitInput:
    """Everything the policy needs, in native-token units."""

    cost_basis: Decimal
    """Native spent acquiring the position (committed amount + buy gas)."""
    estimated_exit_gas: Decimal
    current_value: Decimal
    """Native value of the full position at the current quote."""
    profit_multiple: Decimal


@dataclass(frozen=True)
class ProfitExitDecision:
    should_exit: bool
    threshold: Decimal
    reason: str


class ProfitExitPolicy:
    """Pure policy: has the position reached profit_multiple x its all-in cost?"""

    def evaluate(self, inp: ProfitExitInput) -> ProfitExitDecision:
        threshold = inp.profit_multiple * (inp.cost_basis + inp.estimated_exit_gas)
        if inp.current_value >= threshold:
            return ProfitExitDecision(
                should_exit=True,
                threshold=threshold,
                reason=f"value {inp.current_value} >= threshold {threshold}",
            )
        return ProfitExitDecision(
            should_exit=False,
            threshold=threshold,
            reason=f"value {inp.current_value} < threshold {threshold}",
        )
