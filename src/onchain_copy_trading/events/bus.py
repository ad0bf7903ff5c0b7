"""Application event bus (bubus)."""

from __future__ import annotations

from bubus import EventBus  # type: ignore[import-untyped]


def build_event_bus(name: str = "OnchainCopyTrading") -> EventBus:
    """Create the application event bus. The DI container holds the single instance."""
    return EventBus(
        name=name,
        max_history_size=100,
        wal_path=None,
    )
