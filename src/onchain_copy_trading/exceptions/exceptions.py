"""Custom exceptions for the copy-trading pipeline."""

from __future__ import annotations


class CopyTradingError(Exception):
    """Base exception for copy-trading errors."""

    pass


class ConfigurationError(CopyTradingError):
    """Raised when the pipeline cannot run with the current configuration (aborts the pass)."""

    pass


class MissingRequiredConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    pass


class TransientGatewayError(CopyTradingError):
    """Raised when an upstream request (explorer, aggregator, RPC) fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(TransientGatewayError):
    """Raised when an upstream API returns HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class ValidationError(CopyTradingError):
    """Raised when upstream data cannot be parsed (numeric fields, missing keys)."""

    pass


class ExecutionError(CopyTradingError):
    """Raised when an on-chain action (approval, swap) fails. Terminal for the trade."""

    def __init__(
        self,
        message: str,
        *,
        tx_hash: str | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash
        # "approval" or "swap", when known
        self.stage = stage


class ReceiptTimeoutError(ExecutionError):
    """Raised when no receipt is available within the polling budget."""

    pass


class TransactionRevertedError(ExecutionError):
    """Raised when a mined transaction has a failed status."""

    pass
