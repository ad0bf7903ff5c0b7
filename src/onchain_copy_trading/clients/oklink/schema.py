"""OKLink explorer response types. Keys match the API response (camelCase).

Functional TypedDict syntax is used where a key ("from") is a Python keyword.
"""

from __future__ import annotations

from typing import TypedDict

TransactionListItemSchema = TypedDict(
    "TransactionListItemSchema",
    {
        "txId": str,
        "blockHash": str,
        "height": str,
        # Milliseconds since epoch, as a string.
        "transactionTime": str,
        "from": str,
        "to": str,
        "amount": str,
        "transactionSymbol": str,
        "txFee": str,
        "state": str,
    },
    total=False,
)
"""data[].transactionLists[] item of /address/transaction-list."""

TokenTransferDetailSchema = TypedDict(
    "TokenTransferDetailSchema",
    {
        "index": str,
        "token": str,
        "tokenContractAddress": str,
        "symbol": str,
        "from": str,
        "to": str,
        "tokenId": str,
        "amount": str,
    },
    total=False,
)
"""data[].tokenTransferDetails[] item of /transaction/transaction-fills."""


class TokenBalanceSchema(TypedDict, total=False):
    """data[].tokenList[] item of /address/address-balance-fills."""

    symbol: str
    tokenContractAddress: str
    holdingAmount: str
    priceUsd: str
    valueUsd: str
    tokenId: str
