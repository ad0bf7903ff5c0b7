"""1inch aggregator v5 response types. Keys match the API response (camelCase)."""

from __future__ import annotations

from typing import TypedDict


class TokenSchema(TypedDict, total=False):
    symbol: str
    name: str
    address: str
    decimals: int


class QuoteSchema(TypedDict, total=False):
    """GET /{chainId}/quote."""

    fromToken: TokenSchema
    toToken: TokenSchema
    fromTokenAmount: str
    toTokenAmount: str
    estimatedGas: int


TxSchema = TypedDict(
    "TxSchema",
    {
        "from": str,
        "to": str,
        "data": str,
        "value": str,
        "gas": int,
        "gasPrice": str,
    },
    total=False,
)


class SwapSchema(TypedDict, total=False):
    """GET /{chainId}/swap."""

    fromToken: TokenSchema
    toToken: TokenSchema
    fromTokenAmount: str
    toTokenAmount: str
    tx: TxSchema


class ApproveTransactionSchema(TypedDict, total=False):
    """GET /{chainId}/approve/transaction."""

    data: str
    gasPrice: str
    to: str
    value: str
