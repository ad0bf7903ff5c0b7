# -*- coding: utf-8 -*-
"""Unit tests for chain lookups."""

from __future__ import annotations

import pytest

from onchain_copy_trading.exceptions import ConfigurationError
from onchain_copy_trading.utils.chain import get_chain


def test_get_chain_is_case_insensitive() -> None:
    info = get_chain(" BSC ")

    assert info.chain_id == 56
    assert info.native.decimals == 18
    assert info.stable.address == "0x55d398326f99059ff775485246999027b3197955"


def test_eth_stable_has_six_decimals() -> None:
    assert get_chain("eth").stable.decimals == 6


def test_unknown_chain_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        get_chain("solana")
