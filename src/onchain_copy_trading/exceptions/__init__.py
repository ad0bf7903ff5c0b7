"""Exceptions subpackage."""

from onchain_copy_trading.exceptions.exceptions import (
    ConfigurationError,
    CopyTradingError,
    ExecutionError,
    MissingRequiredConfigError,
    RateLimitError,
    ReceiptTimeoutError,
    TransactionRevertedError,
    TransientGatewayError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "CopyTradingError",
    "ExecutionError",
    "MissingRequiredConfigError",
    "RateLimitError",
    "ReceiptTimeoutError",
    "TransactionRevertedError",
    "TransientGatewayError",
    "ValidationError",
]
