# -*- coding: utf-8 -*-
"""SwapExecutionService: allowance check, approval, swap and receipt waits for one wallet.

Every sequence for a (chain, wallet) pair runs under the same lock, so
transactions from one wallet are signed and submitted in nonce order even
when several monitors act on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.clients.market_gateway.dto import SwapParams, TxReceipt
from onchain_copy_trading.exceptions import CopyTradingError, ExecutionError
from onchain_copy_trading.utils.locks import KeyedLocks
from onchain_copy_trading.utils.validation import mask_address

if TYPE_CHECKING:
    from onchain_copy_trading.clients.market_gateway import IMarketGateway
    from onchain_copy_trading.config import Settings
    from onchain_copy_trading.models.managed_wallet import ManagedWallet


class ApprovalRule(str, Enum):
    """When to submit an (unlimited) router approval before swapping."""

    WHEN_ZERO = "WHEN_ZERO"
    """Approve only if the current allowance is zero (buys)."""
    WHEN_INSUFFICIENT = "WHEN_INSUFFICIENT"
    """Approve if the allowance is zero or not above the swap amount (exits)."""

    def needs_approval(self, allowance: int, amount: int) -> bool:
        if self is ApprovalRule.WHEN_ZERO:
            return allowance == 0
        return allowance == 0 or allowance <= amount


@dataclass(frozen=True)
class SwapExecutionResult:
    tx_hash: str
    submitted_at: datetime
    receipt: TxReceipt
    approval_tx_hash: Optional[str] = None


class SwapExecutionService:
    """Runs approve-if-needed + swap for a managed wallet and waits for both receipts."""

    def __init__(
        self,
        gateway: "IMarketGateway",
        settings: "Settings",
        submission_locks: Optional[KeyedLocks] = None,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the service.

        Args:
            gateway: Market gateway (allowance, calldata, submission, receipts).
            settings: Application settings (slippage, receipt polling budget).
            submission_locks: Per-(chain, wallet) locks; shared by everything that submits.
            clock: Returns the current UTC time (submission time).
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._gateway = gateway
        self._settings = settings
        self._locks = submission_locks if submission_locks is not None else KeyedLocks()
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def execute_swap(
        self,
        chain: str,
        wallet: "ManagedWallet",
        from_token: str,
        to_token: str,
        amount: int,
        *,
        approval: ApprovalRule = ApprovalRule.WHEN_ZERO,
    ) -> SwapExecutionResult:
        """Swap amount (base units of from_token) into to_token from wallet.

        Raises:
            ExecutionError: If the approval or the swap fails at any step. When the
                swap was already broadcast, the error carries its tx_hash.
        """
        trading = self._settings.trading
        async with self._locks.get((chain, wallet.address)):
            with bound_contextvars(chain=chain, wallet_masked=mask_address(wallet.address)):
                approval_tx_hash = await self._ensure_allowance(
                    chain, wallet, from_token, amount, approval
                )

                tx_hash: Optional[str] = None
                try:
                    unsigned = await self._gateway.build_swap(
                        chain,
                        SwapParams(
                            from_token=from_token,
                            to_token=to_token,
                            amount=amount,
                            from_address=wallet.address,
                            slippage_percent=trading.slippage_percent,
                        ),
                    )
                    tx_hash = await self._gateway.submit(wallet.secret_key, unsigned)
                    submitted_at = self._clock()
                    receipt = await self._gateway.wait_receipt(
                        chain,
                        tx_hash,
                        trading.receipt_max_attempts,
                        trading.receipt_poll_seconds,
                    )
                except CopyTradingError as e:
                    raise ExecutionError(
                        f"swap failed: {e}",
                        tx_hash=tx_hash or getattr(e, "tx_hash", None),
                        stage="swap",
                    ) from e

                self._logger.info(
                    "swap_confirmed",
                    tx_hash=tx_hash,
                    from_token=from_token,
                    to_token=to_token,
                    amount=amount,
                    gas_used=receipt.gas_used,
                )
                return SwapExecutionResult(
                    tx_hash=tx_hash,
                    submitted_at=submitted_at,
                    receipt=receipt,
                    approval_tx_hash=approval_tx_hash,
                )

    async def _ensure_allowance(
        self,
        chain: str,
        wallet: "ManagedWallet",
        token: str,
        amount: int,
        rule: ApprovalRule,
    ) -> Optional[str]:
        """Approve the router for token if rule says so. Returns the approval tx hash, if any."""
        approval_tx_hash: Optional[str] = None
        try:
            allowance = await self._gateway.allowance(chain, token, wallet.address)
            if not rule.needs_approval(allowance, amount):
                return None
            self._logger.info("swap_approval_required", token=token, allowance=allowance, amount=amount)
            unsigned = await self._gateway.build_approval(chain, token, wallet.address, None)
            approval_tx_hash = await self._gateway.submit(wallet.secret_key, unsigned)
            await self._gateway.wait_receipt(
                chain,
                approval_tx_hash,
                self._settings.trading.receipt_max_attempts,
                self._settings.trading.receipt_poll_seconds,
            )
        except CopyTradingError as e:
            raise ExecutionError(
                f"approval failed: {e}", tx_hash=approval_tx_hash, stage="approval"
            ) from e
        self._logger.info("swap_approval_confirmed", token=token, tx_hash=approval_tx_hash)
        return approval_tx_hash
