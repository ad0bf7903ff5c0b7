"""Configuration subpackage."""

from onchain_copy_trading.config.config import (
    ApiSettings,
    AppSettings,
    ExitSettings,
    LoggingSettings,
    SchedulerSettings,
    Settings,
    StorageSettings,
    TradingSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ExitSettings",
    "LoggingSettings",
    "SchedulerSettings",
    "Settings",
    "StorageSettings",
    "TradingSettings",
    "get_settings",
]
