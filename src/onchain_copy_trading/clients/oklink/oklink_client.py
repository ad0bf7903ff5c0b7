# -*- coding: utf-8 -*-
"""OKLink explorer API client (address transactions, transfer legs, token holdings)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, cast

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.clients.oklink.schema import (
    TokenBalanceSchema,
    TokenTransferDetailSchema,
    TransactionListItemSchema,
)
from onchain_copy_trading.config import Settings
from onchain_copy_trading.exceptions import MissingRequiredConfigError, TransientGatewayError
from onchain_copy_trading.utils.validation import mask_address, normalize_address

if TYPE_CHECKING:
    from onchain_copy_trading.clients.http import AsyncHttpClient

PROTOCOL_TOKEN_20 = "token_20"


def _dict_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [cast(dict[str, Any], x) for x in cast(list[Any], value) if isinstance(x, dict)]


class OkLinkClient:
    """Client for the OKLink v5 explorer API.

    Every request carries the Ok-Access-Key header. A body whose "code" is not
    "0" is an upstream failure and raises TransientGatewayError.
    """

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client.
            settings: Application settings (uses settings.api.oklink_host, oklink_api_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.oklink_host.rstrip("/")

    def _headers(self) -> Dict[str, str]:
        key = self._settings.api.oklink_api_key
        if not key:
            raise MissingRequiredConfigError("API__OKLINK_API_KEY")
        return {"Ok-Access-Key": key}

    async def _get_data(self, path: str, params: Dict[str, Any]) -> list[dict[str, Any]]:
        """GET an explorer endpoint and return its "data" list."""
        url = f"{self._base_url()}{path}"
        body = await self._http.get(url, params=params, headers=self._headers())
        if not isinstance(body, dict):
            raise TransientGatewayError(
                f"Unexpected OKLink response type: {type(body).__name__}", url=url
            )
        body_d = cast(dict[str, Any], body)
        code = str(body_d.get("code", ""))
        if code != "0":
            self._logger.warning(
                "oklink_error_code",
                oklink_path=path,
                oklink_code=code,
                oklink_msg=body_d.get("msg"),
            )
            raise TransientGatewayError(
                f"OKLink error code {code}: {body_d.get('msg')}", url=url
            )
        return _dict_list(body_d.get("data"))

    async def get_token20_transactions(
        self,
        chain: str,
        address: str,
        *,
        page: int = 1,
        limit: int = 1,
    ) -> list[TransactionListItemSchema]:
        """Return the address's ERC-20 transfer transactions, most recent first."""
        with bound_contextvars(oklink_chain=chain, oklink_address_masked=mask_address(address)):
            data = await self._get_data(
                "/api/v5/explorer/address/transaction-list",
                {
                    "address": address,
                    "chainShortName": chain,
                    "protocolType": PROTOCOL_TOKEN_20,
                    "limit": limit,
                    "page": page,
                },
            )
            if not data:
                return []
            items = _dict_list(data[0].get("transactionLists"))
            return [cast(TransactionListItemSchema, x) for x in items]

    async def get_transaction_transfers(
        self,
        chain: str,
        tx_hash: str,
    ) -> list[TokenTransferDetailSchema]:
        """Return the token transfer details of a transaction, in log order."""
        with bound_contextvars(oklink_chain=chain, oklink_tx_hash=tx_hash):
            data = await self._get_data(
                "/api/v5/explorer/transaction/transaction-fills",
                {"txid": tx_hash, "chainShortName": chain},
            )
            if not data:
                return []
            details = _dict_list(data[0].get("tokenTransferDetails"))
            return [cast(TokenTransferDetailSchema, x) for x in details]

    async def get_token_balance(
        self,
        chain: str,
        address: str,
        token_address: str,
    ) -> Optional[TokenBalanceSchema]:
        """Return the holding entry of token_address for address, or None if absent."""
        with bound_contextvars(oklink_chain=chain, oklink_address_masked=mask_address(address)):
            data = await self._get_data(
                "/api/v5/explorer/address/address-balance-fills",
                {
                    "address": address,
                    "chainShortName": chain,
                    "protocolType": PROTOCOL_TOKEN_20,
                    "tokenContractAddress": normalize_address(token_address),
                },
            )
            if not data:
                return None
            tokens = _dict_list(data[0].get("tokenList"))
            return cast(TokenBalanceSchema, tokens[0]) if tokens else None
