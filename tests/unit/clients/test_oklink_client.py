# -*- coding: utf-8 -*-
"""Unit tests for OkLinkClient."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from onchain_copy_trading.clients.oklink import OkLinkClient
from onchain_copy_trading.config import ApiSettings, Settings
from onchain_copy_trading.exceptions import MissingRequiredConfigError, TransientGatewayError


def _client(body: Any, api_key: str | None = "test-key") -> tuple[OkLinkClient, AsyncMock]:
    http = AsyncMock()
    http.get.return_value = body
    settings = Settings(api=ApiSettings(oklink_host="https://oklink.test/", oklink_api_key=api_key))
    return OkLinkClient(http, settings), http


async def test_token20_transactions_reads_first_page_and_sends_key() -> None:
    client, http = _client(
        {
            "code": "0",
            "msg": "",
            "data": [{"transactionLists": [{"txId": "0xabc", "transactionTime": "1700000000000"}]}],
        }
    )

    items = await client.get_token20_transactions("bsc", "0xwatched")

    assert items == [{"txId": "0xabc", "transactionTime": "1700000000000"}]
    url = http.get.await_args.args[0]
    kwargs = http.get.await_args.kwargs
    assert url == "https://oklink.test/api/v5/explorer/address/transaction-list"
    assert kwargs["headers"] == {"Ok-Access-Key": "test-key"}
    assert kwargs["params"]["protocolType"] == "token_20"
    assert kwargs["params"]["limit"] == 1


async def test_empty_data_returns_empty_list() -> None:
    client, _ = _client({"code": "0", "data": []})

    assert await client.get_token20_transactions("bsc", "0xwatched") == []
    assert await client.get_transaction_transfers("bsc", "0xabc") == []
    assert await client.get_token_balance("bsc", "0xwallet", "0xtoken") is None


async def test_transfer_details_skip_non_dict_entries() -> None:
    client, _ = _client(
        {
            "code": "0",
            "data": [{"tokenTransferDetails": [{"symbol": "WBNB"}, "junk", {"symbol": "ALT"}]}],
        }
    )

    details = await client.get_transaction_transfers("bsc", "0xabc")

    assert [d["symbol"] for d in details] == ["WBNB", "ALT"]


async def test_token_balance_returns_first_holding() -> None:
    client, http = _client(
        {"code": "0", "data": [{"tokenList": [{"holdingAmount": "12.5", "symbol": "ALT"}]}]}
    )

    entry = await client.get_token_balance("bsc", "0xwallet", "0xTOKEN")

    assert entry is not None
    assert entry["holdingAmount"] == "12.5"
    assert http.get.await_args.kwargs["params"]["tokenContractAddress"] == "0xtoken"


async def test_non_zero_code_raises_transient_error() -> None:
    client, _ = _client({"code": "50011", "msg": "rate limited"})

    with pytest.raises(TransientGatewayError, match="50011"):
        await client.get_token20_transactions("bsc", "0xwatched")


async def test_non_dict_body_raises_transient_error() -> None:
    client, _ = _client(["unexpected"])

    with pytest.raises(TransientGatewayError):
        await client.get_transaction_transfers("bsc", "0xabc")


async def test_missing_api_key_raises_before_request() -> None:
    client, http = _client({"code": "0", "data": []}, api_key=None)

    with pytest.raises(MissingRequiredConfigError):
        await client.get_token20_transactions("bsc", "0xwatched")
    http.get.assert_not_awaited()
