# -*- coding: utf-8 -*-
"""Unit tests for classify_legs."""

from __future__ import annotations

import pytest

from onchain_copy_trading.clients.market_gateway.dto import TransferLeg
from onchain_copy_trading.services.signal.classifier import LegKind, classify_legs

REFERENCE = frozenset({"BNB", "WBNB", "ETH", "WETH", "USDT", "USDC", "DAI"})


def _leg(symbol: str, token_id: str = "", token: str | None = None) -> TransferLeg:
    return TransferLeg(
        from_address="0xfrom",
        to_address="0xto",
        token_address=token or f"0x{symbol.lower()}",
        symbol=symbol,
        token_id=token_id,
        amount="1",
    )


def test_no_legs() -> None:
    result = classify_legs([], REFERENCE)

    assert result.kind == LegKind.NO_LEGS
    assert result.buy_leg is None
    assert not result.is_buy


def test_nft_transfer_when_both_legs_have_token_id() -> None:
    result = classify_legs([_leg("WBNB", token_id="7"), _leg("PUNK", token_id="9")], REFERENCE)

    assert result.kind == LegKind.NFT_TRANSFER


def test_one_nft_leg_is_classified_by_symbols() -> None:
    result = classify_legs([_leg("WBNB"), _leg("PUNK", token_id="9")], REFERENCE)

    assert result.kind == LegKind.BUY


@pytest.mark.parametrize(
    "first, last, expected",
    [
        ("ALT", "OTHER", LegKind.ALT_TO_ALT),
        ("USDT", "WBNB", LegKind.REFERENCE_TO_REFERENCE),
        ("ALT", "USDT", LegKind.SELL),
        ("WBNB", "ALT", LegKind.BUY),
    ],
)
def test_two_leg_shapes(first: str, last: str, expected: LegKind) -> None:
    assert classify_legs([_leg(first), _leg(last)], REFERENCE).kind == expected


def test_first_and_last_legs_decide_when_there_are_intermediate_hops() -> None:
    legs = [_leg("WBNB"), _leg("CAKE"), _leg("USDT"), _leg("ALT")]

    result = classify_legs(legs, REFERENCE)

    assert result.kind == LegKind.BUY
    assert result.sell_leg == legs[0]
    assert result.buy_leg == legs[-1]


@pytest.mark.parametrize("symbol, expected", [("ALT", LegKind.ALT_TO_ALT), ("WBNB", LegKind.REFERENCE_TO_REFERENCE)])
def test_single_leg_never_yields_buy(symbol: str, expected: LegKind) -> None:
    assert classify_legs([_leg(symbol)], REFERENCE).kind == expected


def test_symbols_compare_case_insensitively() -> None:
    result = classify_legs([_leg("wbnb"), _leg("Alt")], {"WBNB", "usdt"})

    assert result.kind == LegKind.BUY
    assert classify_legs([_leg("alt"), _leg("Usdt")], {"WBNB", "usdt"}).kind == LegKind.SELL
