# -*- coding: utf-8 -*-
"""Unit tests for Settings, logging redaction and container wiring."""

from __future__ import annotations

from decimal import Decimal

import pytest

from onchain_copy_trading.DI import Container
from onchain_copy_trading.config import Settings, StorageSettings, TradingSettings
from onchain_copy_trading.logging.config import _redact_secrets
from onchain_copy_trading.persistence.repositories.in_memory import InMemoryTradeRepository
from onchain_copy_trading.persistence.repositories.sql import SqlTradeRepository


def test_reference_symbols_are_parsed_upper_cased() -> None:
    trading = TradingSettings(reference_symbols=" bnb, usdt ,,Weth ")

    assert trading.reference_symbols == frozenset({"BNB", "USDT", "WETH"})


def test_default_reference_symbols() -> None:
    assert TradingSettings().reference_symbols == frozenset(
        {"BNB", "WBNB", "ETH", "WETH", "USDT", "USDC", "DAI"}
    )


def test_nested_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXIT__DUST_THRESHOLD_USD", "5")
    monkeypatch.setenv("API__OKLINK_API_KEY", "env-key")

    settings = Settings()

    assert settings.exit.dust_threshold_usd == Decimal("5")
    assert settings.api.oklink_api_key == "env-key"
    assert settings.exit.profit_multiple == Decimal("2")


def test_rpc_url_for_unknown_chain_is_none() -> None:
    assert Settings().api.rpc_url_for("solana") is None


def test_redact_secrets_masks_key_material() -> None:
    event = _redact_secrets(None, "info", {"event": "x", "secret_key": "0xabc", "chain": "bsc"})

    assert event == {"event": "x", "secret_key": "***", "chain": "bsc"}


@pytest.mark.parametrize(
    "backend, expected",
    [("memory", InMemoryTradeRepository), ("sqlite", SqlTradeRepository)],
)
def test_container_selects_repositories_by_backend(backend: str, expected: type) -> None:
    container = Container()
    container.config.override(
        Settings(
            storage=StorageSettings(
                backend=backend,  # type: ignore[arg-type]
                database_url="sqlite+aiosqlite:///:memory:",
            )
        )
    )

    repo = container.trade_repository()

    assert isinstance(repo, expected)
    assert container.reporting_service() is container.reporting_service()
