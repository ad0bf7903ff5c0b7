"""EVM JSON-RPC client."""

from onchain_copy_trading.clients.rpc_client.rpc_client import RpcClient, RpcError

__all__ = ["RpcClient", "RpcError"]
