"""Market gateway: interface, value objects and the HTTP-backed implementation."""

from onchain_copy_trading.clients.market_gateway.dto import (
    LatestTransaction,
    SwapParams,
    SwapQuote,
    TransferLeg,
    TxReceipt,
    UnsignedTx,
)
from onchain_copy_trading.clients.market_gateway.http_gateway import HttpMarketGateway
from onchain_copy_trading.clients.market_gateway.interface import IMarketGateway

__all__ = [
    "HttpMarketGateway",
    "IMarketGateway",
    "LatestTransaction",
    "SwapParams",
    "SwapQuote",
    "TransferLeg",
    "TxReceipt",
    "UnsignedTx",
]
