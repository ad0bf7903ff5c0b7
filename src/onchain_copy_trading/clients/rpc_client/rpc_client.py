"""EVM JSON-RPC client for on-chain reads and raw transaction submission."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional, cast

import structlog

from onchain_copy_trading.exceptions import MissingRequiredConfigError, TransientGatewayError
from onchain_copy_trading.utils.validation import mask_address, parse_int

if TYPE_CHECKING:
    from onchain_copy_trading.clients.http import AsyncHttpClient
    from onchain_copy_trading.config import Settings

# ERC-20 selector (bytes4(keccak256("decimals()")))
SELECTOR_DECIMALS = "0x313ce567"


class RpcError(TransientGatewayError):
    """JSON-RPC response carried an error object."""

    pass


class RpcClient:
    """Client for EVM JSON-RPC. The endpoint is picked per call from settings.api by chain."""

    def __init__(
        self,
        http_client: AsyncHttpClient,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the RPC client.

        Args:
            http_client: HTTP client for POST requests (JSON-RPC).
            settings: Configuration (uses settings.api.eth_rpc_url / bsc_rpc_url).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._request_id = 0

    def _rpc_url(self, chain: str) -> str:
        url = self._settings.api.rpc_url_for(chain)
        if not url:
            raise MissingRequiredConfigError(f"API__{chain.upper()}_RPC_URL")
        return url.rstrip("/")

    async def call(self, chain: str, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request and return its "result".

        Raises:
            TransientGatewayError: If the HTTP request fails after retries.
            RpcError: If the response contains an error object.
        """
        self._request_id += 1
        url = self._rpc_url(chain)
        payload = {"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params}
        response = await self._http.post(url, json=payload)
        if not isinstance(response, dict):
            raise RpcError(f"Unexpected RPC response type: {type(response).__name__}", url=url)
        resp_dict = cast(dict[str, Any], response)
        if "error" in resp_dict:
            err = resp_dict["error"]
            if isinstance(err, dict):
                err_d = cast(dict[str, Any], err)
                msg = str(err_d.get("message", err_d))
            else:
                msg = str(err)
            self._logger.warning("rpc_error", rpc_chain=chain, rpc_method=method, rpc_error=msg)
            raise RpcError(f"RPC error ({method}): {msg}", url=url)
        return resp_dict.get("result")

    async def eth_call(self, chain: str, to: str, data: str, block: str = "latest") -> str:
        """Perform eth_call (read-only contract call) and return the hex result."""
        result = await self.call(chain, "eth_call", [{"to": to, "data": data}, block])
        return str(result) if result is not None else "0x0"

    async def get_erc20_decimals(self, chain: str, token_address: str) -> int:
        raw = await self.eth_call(chain, token_address, SELECTOR_DECIMALS)
        return parse_int(raw, field="decimals")

    async def gas_price(self, chain: str) -> int:
        """Suggested gas price in wei."""
        return parse_int(await self.call(chain, "eth_gasPrice", []), field="gasPrice")

    async def pending_nonce(self, chain: str, address: str) -> int:
        result = await self.call(chain, "eth_getTransactionCount", [address, "pending"])
        nonce = parse_int(result, field="nonce")
        self._logger.debug(
            "rpc_pending_nonce",
            rpc_chain=chain,
            address_masked=mask_address(address),
            nonce=nonce,
        )
        return nonce

    async def send_raw_transaction(self, chain: str, raw_tx_hex: str) -> str:
        """Broadcast a signed transaction and return its hash."""
        result = await self.call(chain, "eth_sendRawTransaction", [raw_tx_hex])
        return str(result)

    async def get_transaction_receipt(self, chain: str, tx_hash: str) -> Optional[dict[str, Any]]:
        """Return the receipt, or None while the transaction is not mined."""
        result = await self.call(chain, "eth_getTransactionReceipt", [tx_hash])
        if not isinstance(result, dict):
            return None
        return cast(dict[str, Any], result)
