"""1inch aggregator client."""

from onchain_copy_trading.clients.one_inch.one_inch_client import OneInchClient

__all__ = ["OneInchClient"]
