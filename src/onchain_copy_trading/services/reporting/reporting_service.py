"""ReportingService: read-only views of watched addresses, wallets and trades.

Views are plain dicts (JSON friendly: Decimals and datetimes as strings) for
the external management layer. Secret keys never appear in them.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

if TYPE_CHECKING:
    from onchain_copy_trading.models.managed_wallet import ManagedWallet
    from onchain_copy_trading.models.trade import Trade, TradeStatus
    from onchain_copy_trading.models.watched_address import WatchedAddress
    from onchain_copy_trading.persistence.repositories.interfaces import (
        IManagedWalletRepository,
        ITradeRepository,
        IWatchedAddressRepository,
    )


def _fmt(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    return value


def watched_address_view(watched: "WatchedAddress") -> dict[str, Any]:
    return {
        "id": str(watched.id),
        "chain": watched.chain,
        "address": watched.address,
        "last_seen_tx_hash": watched.last_seen_tx_hash,
        "last_seen_tx_time": _fmt(watched.last_seen_tx_time),
        "enabled": watched.enabled,
    }


def wallet_view(wallet: "ManagedWallet") -> dict[str, Any]:
    return {
        "id": str(wallet.id),
        "chain": wallet.chain,
        "address": wallet.address,
        "fixed_exit_amount": _fmt(wallet.fixed_exit_amount),
        "enabled": wallet.enabled,
    }


def trade_view(trade: "Trade") -> dict[str, Any]:
    return {
        "id": str(trade.id),
        "chain": trade.chain,
        "watched_address": trade.watched_address,
        "wallet_address": trade.wallet_address,
        "follow_buy_tx_hash": trade.follow_buy_tx_hash,
        "follow_buy_time": _fmt(trade.follow_buy_time),
        "buy_token_address": trade.buy_token_address,
        "buy_symbol": trade.buy_symbol,
        "buy_token_decimals": trade.buy_token_decimals,
        "follow_buy_amount": _fmt(trade.follow_buy_amount),
        "wallet_buy_tx_hash": trade.wallet_buy_tx_hash,
        "wallet_buy_time": _fmt(trade.wallet_buy_time),
        "wallet_buy_amount": _fmt(trade.wallet_buy_amount),
        "wallet_exit_amount": _fmt(trade.wallet_exit_amount),
        "gas_cost": _fmt(trade.gas_cost),
        "principal_sold": trade.principal_sold,
        "principal_sold_tx_hash": trade.principal_sold_tx_hash,
        "status": trade.status.value,
        "failure_reason": trade.failure_reason,
        "created_at": _fmt(trade.created_at),
        "updated_at": _fmt(trade.updated_at),
    }


class ReportingService:
    """Read access to domain records for operators. Has no write operations."""

    def __init__(
        self,
        watched_address_repository: "IWatchedAddressRepository",
        managed_wallet_repository: "IManagedWalletRepository",
        trade_repository: "ITradeRepository",
    ) -> None:
        self._watched_repo = watched_address_repository
        self._wallet_repo = managed_wallet_repository
        self._trade_repo = trade_repository

    async def list_watched_addresses(self) -> list[dict[str, Any]]:
        return [watched_address_view(w) for w in await self._watched_repo.list_all()]

    async def list_wallets(self) -> list[dict[str, Any]]:
        """Enabled wallets without key material."""
        return [wallet_view(w) for w in await self._wallet_repo.list_enabled()]

    async def list_trades(self, status: Optional["TradeStatus"] = None) -> list[dict[str, Any]]:
        """All trades (oldest first), or only those with status."""
        if status is None:
            trades = await self._trade_repo.list_all()
        else:
            trades = await self._trade_repo.list_by_status(status)
        return [trade_view(t) for t in trades]

    async def get_trade(self, trade_id: UUID) -> Optional[dict[str, Any]]:
        trade = await self._trade_repo.get(trade_id)
        return trade_view(trade) if trade is not None else None
