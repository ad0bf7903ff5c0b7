# -*- coding: utf-8 -*-
"""Unit tests for validation helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from onchain_copy_trading.exceptions import ValidationError
from onchain_copy_trading.utils.validation import (
    mask_address,
    normalize_address,
    parse_decimal,
    parse_int,
)


def test_normalize_and_mask_address() -> None:
    assert normalize_address("  0xABCdef  ") == "0xabcdef"
    assert normalize_address("") == ""
    assert mask_address("0x1234567890abcdef") == "0x1234...cdef"
    assert mask_address("short") == "***"
    assert mask_address(None) == "***"


def test_parse_decimal_accepts_numeric_strings() -> None:
    assert parse_decimal(" 1234.5 ", field="amount") == Decimal("1234.5")
    assert parse_decimal(7, field="amount") == Decimal("7")


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", "NaN", "Infinity"])
def test_parse_decimal_rejects_missing_or_non_finite(raw: object) -> None:
    with pytest.raises(ValidationError):
        parse_decimal(raw, field="amount")


@pytest.mark.parametrize(
    "raw, expected",
    [("0x1a", 26), ("26", 26), (26, 26), ("0X10", 16)],
)
def test_parse_int_accepts_decimal_and_hex(raw: object, expected: int) -> None:
    assert parse_int(raw, field="n") == expected


@pytest.mark.parametrize("raw", [None, "", "0xzz", "1.5"])
def test_parse_int_rejects_invalid(raw: object) -> None:
    with pytest.raises(ValidationError):
        parse_int(raw, field="n")
