# -*- coding: utf-8 -*-
"""Market gateway over OKLink (explorer), 1inch (aggregator) and JSON-RPC (submission)."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

import structlog
from cachetools import LRUCache
from eth_account import Account
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.clients.market_gateway.dto import (
    LatestTransaction,
    SwapParams,
    SwapQuote,
    TransferLeg,
    TxReceipt,
    UnsignedTx,
)
from onchain_copy_trading.clients.market_gateway.interface import IMarketGateway
from onchain_copy_trading.clients.oklink import OkLinkClient
from onchain_copy_trading.clients.one_inch import OneInchClient
from onchain_copy_trading.clients.rpc_client import RpcClient
from onchain_copy_trading.config import Settings
from onchain_copy_trading.exceptions import (
    ExecutionError,
    ReceiptTimeoutError,
    TransactionRevertedError,
    ValidationError,
)
from onchain_copy_trading.utils.chain import get_chain
from onchain_copy_trading.utils.validation import (
    mask_address,
    normalize_address,
    parse_decimal,
    parse_int,
)

DECIMALS_CACHE_SIZE = 1024


def _ms_to_datetime(value: Any) -> Optional[datetime]:
    """Parse an explorer millisecond timestamp; None when missing or malformed."""
    try:
        ms = parse_int(value, field="transactionTime")
    except ValidationError:
        return None
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


class HttpMarketGateway(IMarketGateway):
    """IMarketGateway backed by HTTP APIs.

    Signs legacy transactions locally with eth_account (EIP-155) and broadcasts
    them through JSON-RPC. Secret keys are only passed to the signer, never
    logged or stored. Token decimals are cached per (chain, token).
    """

    def __init__(
        self,
        oklink: OkLinkClient,
        one_inch: OneInchClient,
        rpc: RpcClient,
        settings: Settings,
        *,
        sleep: Callable[[float], Any] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            oklink: Explorer client (transactions, transfer legs, balances).
            one_inch: Aggregator client (quotes, swap and approval calldata).
            rpc: JSON-RPC client (decimals, gas price, nonce, broadcast, receipts).
            settings: Application settings (uses settings.trading.default_gas_limit).
            sleep: Awaitable sleep used between receipt polls (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._oklink = oklink
        self._one_inch = one_inch
        self._rpc = rpc
        self._settings = settings
        self._sleep = sleep
        self._decimals: LRUCache[tuple[str, str], int] = LRUCache(maxsize=DECIMALS_CACHE_SIZE)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    # ---- explorer ----

    async def latest_transaction(self, chain: str, address: str) -> Optional[LatestTransaction]:
        items = await self._oklink.get_token20_transactions(chain, address, page=1, limit=1)
        if not items:
            return None
        tx_hash = str(items[0].get("txId") or "").strip()
        if not tx_hash:
            return None
        return LatestTransaction(
            tx_hash=tx_hash,
            timestamp=_ms_to_datetime(items[0].get("transactionTime")),
        )

    async def transaction_legs(self, chain: str, tx_hash: str) -> list[TransferLeg]:
        details = await self._oklink.get_transaction_transfers(chain, tx_hash)
        return [
            TransferLeg(
                from_address=normalize_address(str(d.get("from") or "")),
                to_address=normalize_address(str(d.get("to") or "")),
                token_address=normalize_address(str(d.get("tokenContractAddress") or "")),
                symbol=str(d.get("symbol") or ""),
                token_id=str(d.get("tokenId") or ""),
                amount=str(d.get("amount") or ""),
            )
            for d in details
        ]

    async def token_balance(self, chain: str, address: str, token: str) -> Optional[Decimal]:
        entry = await self._oklink.get_token_balance(chain, address, token)
        if entry is None:
            return None
        raw = entry.get("holdingAmount")
        if raw is None or str(raw).strip() == "":
            return None
        return parse_decimal(raw, field="holdingAmount")

    # ---- aggregator ----

    async def quote(self, chain: str, from_token: str, to_token: str, amount: int) -> SwapQuote:
        body = await self._one_inch.quote(chain, from_token, to_token, amount)
        to_token_info = body.get("toToken") or {}
        return SwapQuote(
            to_amount=parse_int(body.get("toTokenAmount"), field="toTokenAmount"),
            to_token_decimals=parse_int(to_token_info.get("decimals"), field="toToken.decimals"),
            estimated_gas=parse_int(body.get("estimatedGas", 0), field="estimatedGas"),
        )

    async def build_swap(self, chain: str, params: SwapParams) -> UnsignedTx:
        body = await self._one_inch.swap(
            chain,
            from_token=params.from_token,
            to_token=params.to_token,
            amount=params.amount,
            from_address=params.from_address,
            slippage=params.slippage_percent,
        )
        tx = body.get("tx")
        if not tx:
            raise ValidationError("swap response has no tx")
        gas = parse_int(tx.get("gas", 0), field="tx.gas")
        return UnsignedTx(
            chain=chain,
            from_address=normalize_address(str(tx.get("from") or params.from_address)),
            to=normalize_address(str(tx.get("to") or "")),
            data=str(tx.get("data") or "0x"),
            value=parse_int(tx.get("value", 0), field="tx.value"),
            gas_price=parse_int(tx.get("gasPrice", 0), field="tx.gasPrice"),
            gas=gas or None,
        )

    async def allowance(self, chain: str, token: str, owner: str) -> int:
        raw = await self._one_inch.allowance(chain, token, owner)
        return parse_int(raw, field="allowance")

    async def build_approval(
        self,
        chain: str,
        token: str,
        owner: str,
        amount: Optional[int] = None,
    ) -> UnsignedTx:
        body = await self._one_inch.approve_transaction(chain, token, amount)
        return UnsignedTx(
            chain=chain,
            from_address=normalize_address(owner),
            to=normalize_address(str(body.get("to") or "")),
            data=str(body.get("data") or "0x"),
            value=parse_int(body.get("value", 0), field="value"),
            gas_price=parse_int(body.get("gasPrice", 0), field="gasPrice"),
        )

    # ---- chain ----

    async def submit(self, secret_key: str, tx: UnsignedTx) -> str:
        chain_info = get_chain(tx.chain)
        nonce = await self._rpc.pending_nonce(tx.chain, tx.from_address)
        gas_price = tx.gas_price or await self._rpc.gas_price(tx.chain)
        payload: dict[str, Any] = {
            "nonce": nonce,
            "gasPrice": gas_price,
            "gas": tx.gas or self._settings.trading.default_gas_limit,
            "to": tx.to,
            "value": tx.value,
            "data": tx.data,
            "chainId": chain_info.chain_id,
        }
        try:
            signed = Account.sign_transaction(payload, secret_key)
        except (ValueError, TypeError) as e:
            # Message is built without the key or the exception text, which may echo it.
            raise ExecutionError(f"could not sign transaction ({type(e).__name__})") from None
        tx_hash = await self._rpc.send_raw_transaction(tx.chain, "0x" + bytes(signed.raw_transaction).hex())
        self._logger.info(
            "gateway_tx_submitted",
            chain=tx.chain,
            from_masked=mask_address(tx.from_address),
            to_masked=mask_address(tx.to),
            nonce=nonce,
            tx_hash=tx_hash,
        )
        return tx_hash

    async def wait_receipt(
        self,
        chain: str,
        tx_hash: str,
        max_attempts: int,
        interval: float,
    ) -> TxReceipt:
        with bound_contextvars(chain=chain, tx_hash=tx_hash):
            for attempt in range(max_attempts):
                raw = await self._rpc.get_transaction_receipt(chain, tx_hash)
                if raw is not None:
                    receipt = TxReceipt(
                        tx_hash=tx_hash,
                        status=parse_int(raw.get("status", 0), field="status"),
                        gas_used=parse_int(raw.get("gasUsed", 0), field="gasUsed"),
                        effective_gas_price=parse_int(
                            raw.get("effectiveGasPrice", 0), field="effectiveGasPrice"
                        ),
                    )
                    if not receipt.succeeded:
                        self._logger.warning("gateway_tx_reverted", attempts=attempt + 1)
                        raise TransactionRevertedError("tx status failed", tx_hash=tx_hash)
                    self._logger.debug("gateway_tx_mined", attempts=attempt + 1)
                    return receipt
                if attempt + 1 < max_attempts:
                    await self._sleep(interval)
            self._logger.warning("gateway_receipt_timeout", attempts=max_attempts)
            raise ReceiptTimeoutError(
                f"no receipt after {max_attempts} attempts", tx_hash=tx_hash
            )

    async def token_decimals(self, chain: str, token: str) -> int:
        key = (chain, normalize_address(token))
        cached = self._decimals.get(key)
        if cached is not None:
            return cached
        native = get_chain(chain).native
        if key[1] == native.address:
            decimals = native.decimals
        else:
            decimals = await self._rpc.get_erc20_decimals(chain, key[1])
        self._decimals[key] = decimals
        return decimals

    async def gas_price(self, chain: str) -> int:
        return await self._rpc.gas_price(chain)
