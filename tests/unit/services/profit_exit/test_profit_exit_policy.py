# -*- coding: utf-8 -*-
"""Unit tests for ProfitExitPolicy."""

from __future__ import annotations

from decimal import Decimal

import pytest

from onchain_copy_trading.services.profit_exit import ProfitExitInput, ProfitExitPolicy


def _input(current_value: str, multiple: str = "2") -> ProfitExitInput:
    return ProfitExitInput(
        cost_basis=Decimal("1.00"),
        estimated_exit_gas=Decimal("0.02"),
        current_value=Decimal(current_value),
        profit_multiple=Decimal(multiple),
    )


@pytest.mark.parametrize(
    "value, expected",
    [("2.04", True), ("2.5", True), ("2.039999", False), ("0", False)],
)
def test_fires_at_multiple_of_cost_plus_exit_gas(value: str, expected: bool) -> None:
    decision = ProfitExitPolicy().evaluate(_input(value))

    assert decision.threshold == Decimal("2.04")
    assert decision.should_exit is expected


def test_threshold_scales_with_multiple() -> None:
    decision = ProfitExitPolicy().evaluate(_input("3.06", multiple="3"))

    assert decision.threshold == Decimal("3.06")
    assert decision.should_exit
    assert ">=" in decision.reason
