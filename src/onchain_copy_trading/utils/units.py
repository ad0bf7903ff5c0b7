"""Conversion between human token amounts and integer base units."""

from __future__ import annotations

from decimal import ROUND_DOWN, Context, Decimal, getcontext


def _exact_context(value: Decimal) -> Context:
    # scaleb rounds to context precision; keep every coefficient digit.
    digits = len(value.as_tuple().digits)
    return Context(prec=max(getcontext().prec, digits))


def to_base_units(amount: Decimal, decimals: int) -> int:
    """Scale a human amount up to integer base units, truncating dust below one unit."""
    scaled = amount.scaleb(decimals, context=_exact_context(amount))
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def from_base_units(amount: int, decimals: int) -> Decimal:
    """Scale integer base units down to a human amount without losing digits."""
    raw = Decimal(amount)
    return raw.scaleb(-decimals, context=_exact_context(raw))


def gas_fee(gas_price_wei: int, gas_units: int, native_decimals: int) -> Decimal:
    """Native-token cost of gas_units at gas_price_wei."""
    return from_base_units(gas_price_wei * gas_units, native_decimals)
