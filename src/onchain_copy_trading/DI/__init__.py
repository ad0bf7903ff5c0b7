"""Dependency injection container."""

from onchain_copy_trading.DI.container import Container

__all__ = ["Container"]
