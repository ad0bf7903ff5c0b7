# -*- coding: utf-8 -*-
"""1inch aggregator v5 client (quote, swap, allowance, approval calldata)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, cast

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.clients.one_inch.schema import (
    ApproveTransactionSchema,
    QuoteSchema,
    SwapSchema,
)
from onchain_copy_trading.config import Settings
from onchain_copy_trading.exceptions import TransientGatewayError
from onchain_copy_trading.utils.chain import get_chain

if TYPE_CHECKING:
    from onchain_copy_trading.clients.http import AsyncHttpClient


class OneInchClient:
    """Client for the 1inch aggregator (v5 REST, one path prefix per chain id)."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _url(self, chain: str, path: str) -> str:
        chain_id = get_chain(chain).chain_id
        return f"{self._settings.api.one_inch_host.rstrip('/')}/{chain_id}/{path}"

    async def _get(self, chain: str, path: str, params: Dict[str, Any]) -> dict[str, Any]:
        url = self._url(chain, path)
        with bound_contextvars(one_inch_chain=chain, one_inch_path=path):
            body = await self._http.get(url, params=params)
        if not isinstance(body, dict):
            raise TransientGatewayError(
                f"Unexpected 1inch response type: {type(body).__name__}", url=url
            )
        return cast(dict[str, Any], body)

    async def quote(
        self,
        chain: str,
        from_token: str,
        to_token: str,
        amount: int,
    ) -> QuoteSchema:
        """Price amount (base units of from_token) in to_token."""
        body = await self._get(
            chain,
            "quote",
            {"fromTokenAddress": from_token, "toTokenAddress": to_token, "amount": str(amount)},
        )
        return cast(QuoteSchema, body)

    async def swap(
        self,
        chain: str,
        *,
        from_token: str,
        to_token: str,
        amount: int,
        from_address: str,
        slippage: float,
    ) -> SwapSchema:
        """Build swap calldata for from_address."""
        body = await self._get(
            chain,
            "swap",
            {
                "fromTokenAddress": from_token,
                "toTokenAddress": to_token,
                "amount": str(amount),
                "fromAddress": from_address,
                "slippage": slippage,
            },
        )
        return cast(SwapSchema, body)

    async def allowance(self, chain: str, token: str, wallet: str) -> str:
        """Return the router's allowance for wallet on token (base units, as a string)."""
        body = await self._get(
            chain,
            "approve/allowance",
            {"tokenAddress": token, "walletAddress": wallet},
        )
        return str(body.get("allowance", "0"))

    async def approve_transaction(
        self,
        chain: str,
        token: str,
        amount: Optional[int] = None,
    ) -> ApproveTransactionSchema:
        """Build approval calldata for the router. amount None means unlimited."""
        params: Dict[str, Any] = {"tokenAddress": token}
        if amount is not None:
            params["amount"] = str(amount)
        body = await self._get(chain, "approve/transaction", params)
        return cast(ApproveTransactionSchema, body)
