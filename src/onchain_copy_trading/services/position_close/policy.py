"""PositionClosePolicy: pure dust test for residual holdings."""

from __future__ import annotations

from decimal import Decimal


class PositionClosePolicy:
    """A residual holding worth at most the threshold (stable units) counts as exited."""

    def is_dust(self, value: Decimal, threshold: Decimal) -> bool:
        return value <= threshold
