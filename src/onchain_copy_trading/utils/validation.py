"""Validation helpers for addresses and numeric fields."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from onchain_copy_trading.exceptions import ValidationError


def normalize_address(addr: str) -> str:
    """Return the stripped, lower-cased address used as storage and comparison key."""
    return (addr or "").strip().lower()


def mask_address(addr: str | None) -> str:
    """Return a masked address for logging (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"


def parse_decimal(value: Any, *, field: str) -> Decimal:
    """Parse an upstream numeric field into a finite Decimal.

    Raises:
        ValidationError: If the value is missing, not numeric, or not finite.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is empty")
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"{field} is not numeric: {value!r}") from e
    if not parsed.is_finite():
        raise ValidationError(f"{field} is not finite: {value!r}")
    return parsed


def parse_int(value: Any, *, field: str) -> int:
    """Parse a decimal or 0x-prefixed hex integer field.

    Raises:
        ValidationError: If the value cannot be parsed as an integer.
    """
    if isinstance(value, int):
        return value
    s = str(value if value is not None else "").strip()
    if not s:
        raise ValidationError(f"{field} is empty")
    try:
        return int(s, 16) if s.lower().startswith("0x") else int(s)
    except ValueError as e:
        raise ValidationError(f"{field} is not an integer: {value!r}") from e
