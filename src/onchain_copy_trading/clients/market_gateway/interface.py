# -*- coding: utf-8 -*-
"""Abstract market gateway: explorer reads, aggregator quotes/calldata, signing and submission."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from onchain_copy_trading.clients.market_gateway.dto import (
    LatestTransaction,
    SwapParams,
    SwapQuote,
    TransferLeg,
    TxReceipt,
    UnsignedTx,
)


class IMarketGateway(ABC):
    """Everything the pipeline needs from the outside world.

    Upstream failures surface as TransientGatewayError (after retries). Receipt
    waits raise ReceiptTimeoutError or TransactionRevertedError.
    """

    @abstractmethod
    async def latest_transaction(self, chain: str, address: str) -> Optional[LatestTransaction]:
        """Return the most recent token-transfer transaction, or None if there is none."""
        ...

    @abstractmethod
    async def transaction_legs(self, chain: str, tx_hash: str) -> list[TransferLeg]:
        """Return the token transfers of a transaction in log order."""
        ...

    @abstractmethod
    async def token_balance(self, chain: str, address: str, token: str) -> Optional[Decimal]:
        """Return the address's holding of token in human units, or None if absent."""
        ...

    @abstractmethod
    async def quote(self, chain: str, from_token: str, to_token: str, amount: int) -> SwapQuote:
        """Quote amount (base units of from_token) in to_token."""
        ...

    @abstractmethod
    async def build_swap(self, chain: str, params: SwapParams) -> UnsignedTx:
        ...

    @abstractmethod
    async def allowance(self, chain: str, token: str, owner: str) -> int:
        """Router allowance granted by owner on token, in base units."""
        ...

    @abstractmethod
    async def build_approval(
        self,
        chain: str,
        token: str,
        owner: str,
        amount: Optional[int] = None,
    ) -> UnsignedTx:
        """Build a router approval. amount None means unlimited."""
        ...

    @abstractmethod
    async def submit(self, secret_key: str, tx: UnsignedTx) -> str:
        """Sign and broadcast tx, returning its hash."""
        ...

    @abstractmethod
    async def wait_receipt(
        self,
        chain: str,
        tx_hash: str,
        max_attempts: int,
        interval: float,
    ) -> TxReceipt:
        """Poll for the receipt of tx_hash.

        Raises:
            ReceiptTimeoutError: If no receipt arrived within max_attempts polls.
            TransactionRevertedError: If the receipt reports failure.
        """
        ...

    @abstractmethod
    async def token_decimals(self, chain: str, token: str) -> int:
        ...

    @abstractmethod
    async def gas_price(self, chain: str) -> int:
        """Suggested gas price in wei."""
        ...
