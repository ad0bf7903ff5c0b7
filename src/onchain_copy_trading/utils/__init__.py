# -*- coding: utf-8 -*-
"""Utility modules."""

from onchain_copy_trading.utils.chain import CHAINS, ChainInfo, TokenInfo, get_chain
from onchain_copy_trading.utils.locks import KeyedLocks, PassGuard, PassOutcome
from onchain_copy_trading.utils.units import from_base_units, gas_fee, to_base_units
from onchain_copy_trading.utils.validation import (
    mask_address,
    normalize_address,
    parse_decimal,
    parse_int,
)

__all__ = [
    "CHAINS",
    "ChainInfo",
    "KeyedLocks",
    "PassGuard",
    "PassOutcome",
    "TokenInfo",
    "from_base_units",
    "gas_fee",
    "get_chain",
    "mask_address",
    "normalize_address",
    "parse_decimal",
    "parse_int",
    "to_base_units",
]
