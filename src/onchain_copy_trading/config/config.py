# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, API__OKLINK_API_KEY.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "onchain-copy-trading"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/copy_trading.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the explorer, aggregator and JSON-RPC endpoints (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    oklink_host: str = Field(
        default="https://www.oklink.com",
        description="OKLink explorer API base URL.",
    )
    oklink_api_key: Optional[str] = Field(
        default=None,
        description="OKLink access key (sent as Ok-Access-Key header).",
    )
    one_inch_host: str = Field(
        default="https://api.1inch.io/v5.0",
        description="1inch aggregator API base URL (chain id is appended).",
    )
    eth_rpc_url: str = Field(
        default="https://eth.llamarpc.com",
        description="Ethereum mainnet JSON-RPC URL.",
    )
    bsc_rpc_url: str = Field(
        default="https://bsc-dataseed.binance.org",
        description="BNB Smart Chain JSON-RPC URL.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=4,
        ge=1,
        le=20,
        description="Maximum number of retries for failed requests.",
    )

    def rpc_url_for(self, chain: str) -> Optional[str]:
        """Return the configured JSON-RPC URL for a chain short name, or None."""
        return {"eth": self.eth_rpc_url, "bsc": self.bsc_rpc_url}.get(chain)


class TradingSettings(BaseSettings):
    """Swap execution and signal classification parameters."""

    model_config = SettingsConfigDict(extra="ignore")

    slippage_percent: float = Field(
        default=20.0,
        gt=0.0,
        le=50.0,
        description="Max slippage passed to the aggregator when building swaps.",
    )
    receipt_max_attempts: int = Field(
        default=30,
        ge=1,
        le=600,
        description="Receipt polling attempts before giving up on a transaction.",
    )
    receipt_poll_seconds: float = Field(
        default=3.0,
        ge=0.0,
        le=60.0,
        description="Delay between receipt polling attempts.",
    )
    default_gas_limit: int = Field(
        default=1_000_000,
        ge=21_000,
        description="Gas limit used when a built transaction carries none.",
    )
    # Raw string from env so pydantic-settings does not try to JSON-decode it.
    reference_symbols_raw: str = Field(
        default="BNB,WBNB,ETH,WETH,USDT,USDC,DAI",
        description="Native/stable symbols used as valuation anchors. Env: TRADING__REFERENCE_SYMBOLS.",
        validation_alias="reference_symbols",
    )

    @computed_field
    @property
    def reference_symbols(self) -> frozenset[str]:
        """Parse comma-separated reference_symbols_raw into an upper-cased set."""
        return frozenset(
            s.strip().upper() for s in self.reference_symbols_raw.split(",") if s.strip()
        )


class ExitSettings(BaseSettings):
    """Profit-exit and position-close thresholds."""

    model_config = SettingsConfigDict(extra="ignore")

    profit_multiple: Decimal = Field(
        default=Decimal("2"),
        gt=0,
        description="Position value must reach multiple x (cost basis + exit gas) to trigger.",
    )
    principal_sell_multiple: Decimal = Field(
        default=Decimal("2"),
        gt=0,
        description="Native value sold back on trigger, as a multiple of (cost basis + exit gas).",
    )
    dust_threshold_usd: Decimal = Field(
        default=Decimal("10"),
        ge=0,
        description="Residual stable value at or below which a position counts as exited.",
    )


class SchedulerSettings(BaseSettings):
    """Interval of each periodic pass."""

    model_config = SettingsConfigDict(extra="ignore")

    detection_interval_seconds: float = Field(default=10.0, ge=0.5, le=3600.0)
    profit_exit_interval_seconds: float = Field(default=60.0, ge=1.0, le=86400.0)
    position_close_interval_seconds: float = Field(default=300.0, ge=1.0, le=86400.0)


class StorageSettings(BaseSettings):
    """Domain store backend."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["memory", "sqlite"] = "sqlite"
    database_url: str = Field(
        default="sqlite+aiosqlite:///copy_trading.db",
        description="SQLAlchemy async URL used when backend is sqlite.",
    )
    echo_sql: bool = False


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, EXIT__DUST_THRESHOLD_USD.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    trading: TradingSettings = Field(default_factory=TradingSettings)
    exit: ExitSettings = Field(default_factory=ExitSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(exit={"dust_threshold_usd": "5"}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from onchain_copy_trading.config import get_settings

        settings = get_settings()
        attempts = settings.trading.receipt_max_attempts
    """
    return Settings()
