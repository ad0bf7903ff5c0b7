"""Static per-chain facts: chain ids, native token and stable token for valuation."""

from __future__ import annotations

from dataclasses import dataclass

from onchain_copy_trading.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """Contract address and decimal precision of a token."""

    address: str
    decimals: int


@dataclass(frozen=True, slots=True)
class ChainInfo:
    """Everything the pipeline needs to know about one supported chain."""

    name: str
    """Short name used by the explorer (eth, bsc)."""
    chain_id: int
    native: TokenInfo
    """Token spent when mirroring a buy and received on exit."""
    stable: TokenInfo
    """Stable token used to value residual holdings."""


CHAINS: dict[str, ChainInfo] = {
    "eth": ChainInfo(
        name="eth",
        chain_id=1,
        # Aggregator pseudo-address for the chain's native coin.
        native=TokenInfo("0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee", 18),
        stable=TokenInfo("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48", 6),
    ),
    "bsc": ChainInfo(
        name="bsc",
        chain_id=56,
        native=TokenInfo("0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c", 18),
        stable=TokenInfo("0x55d398326f99059ff775485246999027b3197955", 18),
    ),
}


def get_chain(chain: str) -> ChainInfo:
    """Return ChainInfo for a chain short name.

    Raises:
        ConfigurationError: If the chain is not supported.
    """
    info = CHAINS.get((chain or "").strip().lower())
    if info is None:
        raise ConfigurationError(f"Unsupported chain: {chain!r}")
    return info
