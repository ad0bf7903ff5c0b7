"""HTTP and API clients."""

from onchain_copy_trading.clients.http import AsyncHttpClient
from onchain_copy_trading.clients.market_gateway import HttpMarketGateway, IMarketGateway
from onchain_copy_trading.clients.oklink import OkLinkClient
from onchain_copy_trading.clients.one_inch import OneInchClient
from onchain_copy_trading.clients.rpc_client import RpcClient

__all__ = [
    "AsyncHttpClient",
    "HttpMarketGateway",
    "IMarketGateway",
    "OkLinkClient",
    "OneInchClient",
    "RpcClient",
]
