# -*- coding: utf-8 -*-
"""SignalDetectorService: turns new transactions of watched addresses into buy signals.

For each enabled watched address: fetch the latest token-transfer transaction,
skip it if already seen, classify its legs, advance the cursor, and hand BUY
signals that pass the per-token dedup check to the trade executor.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Callable, Optional

import structlog
from structlog.contextvars import bound_contextvars

from onchain_copy_trading.exceptions import ConfigurationError, CopyTradingError
from onchain_copy_trading.models.trade import TradeStatus
from onchain_copy_trading.services.signal.classifier import LegKind, classify_legs
from onchain_copy_trading.services.signal.dto import BuySignal, DetectionPassResult
from onchain_copy_trading.utils.validation import mask_address, parse_decimal

if TYPE_CHECKING:
    from onchain_copy_trading.clients.market_gateway import IMarketGateway
    from onchain_copy_trading.config import Settings
    from onchain_copy_trading.models.managed_wallet import ManagedWallet
    from onchain_copy_trading.models.trade import Trade
    from onchain_copy_trading.models.watched_address import WatchedAddress
    from onchain_copy_trading.persistence.repositories.interfaces import (
        IManagedWalletRepository,
        ITradeRepository,
        IWatchedAddressRepository,
    )
    from onchain_copy_trading.services.trade_execution import TradeExecutorService


class SignalDetectorService:
    """Detects qualifying buys of watched addresses and triggers mirrored trades."""

    def __init__(
        self,
        gateway: "IMarketGateway",
        watched_address_repository: "IWatchedAddressRepository",
        managed_wallet_repository: "IManagedWalletRepository",
        trade_repository: "ITradeRepository",
        trade_executor: "TradeExecutorService",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the detector.

        Args:
            gateway: Market gateway (latest transaction, transfer legs).
            watched_address_repository: Watched addresses and their last-seen cursor.
            managed_wallet_repository: Source of the enabled wallet pool.
            trade_repository: Used for the per-token dedup check.
            trade_executor: Executes buy signals.
            settings: Application settings (uses settings.trading.reference_symbols).
            get_logger: Logger factory.
            logger_name: Optional logger name.
        """
        self._gateway = gateway
        self._watched_repo = watched_address_repository
        self._wallet_repo = managed_wallet_repository
        self._trade_repo = trade_repository
        self._executor = trade_executor
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def run_pass(self) -> DetectionPassResult:
        """Scan every enabled watched address once, strictly one after another.

        Raises:
            ConfigurationError: If no managed wallet is enabled, or a signal's
                chain has no wallet. The rest of the pass is abandoned.
        """
        wallets = await self._wallet_repo.list_enabled()
        if not wallets:
            self._logger.error("detection_pass_no_enabled_wallets")
            raise ConfigurationError("no enabled managed wallets")

        result = DetectionPassResult()
        for watched in await self._watched_repo.list_enabled():
            result.addresses_scanned += 1
            try:
                trade = await self.process_address(watched, wallets, result=result)
            except ConfigurationError:
                raise
            except CopyTradingError as e:
                result.errors += 1
                result.error_addresses.append(watched.address)
                self._logger.warning(
                    "detection_address_failed",
                    chain=watched.chain,
                    address_masked=mask_address(watched.address),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                continue
            if trade is None:
                continue
            if trade.status == TradeStatus.OPEN:
                result.trades_opened += 1
            else:
                result.trades_failed += 1

        self._logger.info(
            "detection_pass_completed",
            addresses_scanned=result.addresses_scanned,
            signals=result.signals,
            trades_opened=result.trades_opened,
            trades_failed=result.trades_failed,
            skipped_duplicates=result.skipped_duplicates,
            errors=result.errors,
        )
        return result

    async def process_address(
        self,
        watched: "WatchedAddress",
        wallets: Sequence["ManagedWallet"],
        *,
        result: Optional[DetectionPassResult] = None,
    ) -> Optional["Trade"]:
        """Evaluate the latest transaction of one watched address.

        Returns the Trade created for a qualifying buy, or None.

        Raises:
            TransientGatewayError: If the transaction lookups fail; the cursor
                is left where it was so the next pass retries.
            ValidationError: If the buy amount cannot be parsed (cursor already advanced).
        """
        with bound_contextvars(chain=watched.chain, address_masked=mask_address(watched.address)):
            latest = await self._gateway.latest_transaction(watched.chain, watched.address)
            if latest is None or watched.has_seen(latest.tx_hash):
                return None

            legs = await self._gateway.transaction_legs(watched.chain, latest.tx_hash)
            classification = classify_legs(legs, self._settings.trading.reference_symbols)

            # The cursor moves before anything can fail, so a transaction is evaluated once.
            await self._watched_repo.advance_last_seen(watched.id, latest.tx_hash, latest.timestamp)
            self._logger.debug(
                "detection_tx_classified",
                tx_hash=latest.tx_hash,
                kind=classification.kind.value,
                legs=len(legs),
            )

            if classification.kind != LegKind.BUY or classification.buy_leg is None:
                return None

            buy_leg = classification.buy_leg
            amount = parse_decimal(buy_leg.amount, field="amount")
            if result is not None:
                result.signals += 1

            existing = await self._trade_repo.find_non_closed_by_token(buy_leg.token_address)
            if existing is not None:
                if result is not None:
                    result.skipped_duplicates += 1
                self._logger.info(
                    "detection_duplicate_token",
                    tx_hash=latest.tx_hash,
                    token=buy_leg.token_address,
                    symbol=buy_leg.symbol,
                    existing_trade_id=str(existing.id),
                    existing_status=existing.status.value,
                )
                return None

            signal = BuySignal(
                chain=watched.chain,
                watched_address=watched.address,
                tx_hash=latest.tx_hash,
                tx_time=latest.timestamp,
                token_address=buy_leg.token_address,
                symbol=buy_leg.symbol,
                amount=amount,
            )
            self._logger.info(
                "detection_buy_signal",
                tx_hash=signal.tx_hash,
                token=signal.token_address,
                symbol=signal.symbol,
                amount=str(signal.amount),
            )
            return await self._executor.execute(signal, wallets)
