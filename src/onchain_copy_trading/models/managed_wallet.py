# -*- coding: utf-8 -*-
"""ManagedWallet: an operator-controlled wallet that mirrors buys."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from onchain_copy_trading.utils.validation import normalize_address


@dataclass(frozen=True, slots=True)
class ManagedWallet:
    """Wallet in the trading pool. Read-only to the pipeline.

    secret_key is excluded from repr and equality so it never lands in logs or
    assertion output.
    """

    id: UUID
    chain: str
    address: str
    secret_key: str = field(repr=False, compare=False)
    fixed_exit_amount: Decimal = Decimal("0")
    """Native-token amount committed per mirrored trade."""
    enabled: bool = True

    @classmethod
    def create(
        cls,
        chain: str,
        address: str,
        secret_key: str,
        fixed_exit_amount: Decimal,
        *,
        enabled: bool = True,
        id: Optional[UUID] = None,
    ) -> ManagedWallet:
        """Create a wallet record.

        Raises:
            ValueError: If fixed_exit_amount <= 0 or chain/address is empty.
        """
        if fixed_exit_amount <= 0:
            raise ValueError("fixed_exit_amount must be > 0")
        chain = chain.strip().lower()
        address = normalize_address(address)
        if not chain or not address:
            raise ValueError("chain and address must be non-empty")
        return cls(
            id=id or uuid4(),
            chain=chain,
            address=address,
            secret_key=secret_key,
            fixed_exit_amount=fixed_exit_amount,
            enabled=enabled,
        )
