# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire.

Every event carries the service identity, never carries managed-wallet key
material, and renders token amounts (Decimal) as plain numeric strings so JSON
output stays parseable by log shippers.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

import logfire
import structlog
from structlog.types import EventDict, Processor

from onchain_copy_trading.config import AppSettings, LoggingSettings, Settings, get_settings

LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# Keys that must never reach a renderer, whatever a caller binds.
_REDACTED_KEYS = frozenset({"secret_key", "private_key"})


def _service_context(app_settings: AppSettings) -> Processor:
    """Build a processor that stamps logger name and service identity on each event."""
    static: dict[str, Any] = {
        "app_name": app_settings.app_name,
        "environment": app_settings.environment,
    }
    if app_settings.service_name:
        static["service_name"] = app_settings.service_name
    if app_settings.service_version:
        static["service_version"] = app_settings.service_version

    def _add(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        event_dict.update(static)
        return event_dict

    return _add


def _redact_secrets(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace secret material with a placeholder."""
    for key in _REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _render_amounts(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Render Decimal amounts as fixed-point strings ("0.0005", not "5E-4")."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = format(value, "f")
    return event_dict


def _build_handlers(logging_settings: LoggingSettings) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if logging_settings.log_to_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, logging_settings.console_level))
        handlers.append(console_handler)

    if logging_settings.log_to_file:
        log_file_path = Path(logging_settings.log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_file_path,
            when=logging_settings.log_file_when,
            interval=logging_settings.log_file_interval,
            backupCount=logging_settings.log_file_backup_count,
            encoding="utf-8",
            utc=logging_settings.log_file_utc,
        )
        file_handler.setLevel(getattr(logging, logging_settings.file_level))
        handlers.append(file_handler)

    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _build_processors(settings: Settings) -> list[Processor]:
    logging_settings = settings.logging
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings.app),
        _redact_secrets,
        _render_amounts,
    ]

    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    # File output is always JSON; console follows json_format unless a file is also written.
    if logging_settings.log_to_console or logging_settings.log_to_file:
        use_json = logging_settings.log_to_file or logging_settings.json_format
        processors.append(
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer()
        )
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib handlers, optional Logfire export and the structlog pipeline."""
    settings = settings or get_settings()
    logging_settings = settings.logging

    handlers = _build_handlers(logging_settings)
    if handlers:
        logging.basicConfig(level=min(h.level for h in handlers), handlers=handlers)

    if logging_settings.logfire_enabled:
        app_settings = settings.app
        logfire.configure(
            token=logging_settings.logfire_token,
            service_name=app_settings.service_name or app_settings.app_name,
            service_version=app_settings.service_version,
            min_level=LOG_LEVEL_TO_LOGFIRE[logging_settings.logfire_level],  # type: ignore[arg-type]
            environment=app_settings.environment,
        )

    structlog.configure(
        processors=_build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
