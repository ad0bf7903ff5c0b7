# -*- coding: utf-8 -*-
"""Async SQLAlchemy engine and session factory for the SQL repositories."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Callable, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from onchain_copy_trading.persistence.repositories.sql.orm import Base


def _is_memory_url(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"))


class Database:
    """Owns the async engine; hands out sessions that commit on success.

    In-memory SQLite URLs use a StaticPool so every session sees the same
    database (each new connection would otherwise get an empty one).
    """

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        kwargs: dict[str, Any] = {"echo": echo}
        if _is_memory_url(url):
            kwargs["poolclass"] = StaticPool
            kwargs["connect_args"] = {"check_same_thread": False}
        self._url = url
        self._engine: AsyncEngine = create_async_engine(url, **kwargs)
        self._sessionmaker = async_sessionmaker(self._engine, expire_on_commit=False)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def init_schema(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._logger.info("database_schema_ready", tables=sorted(Base.metadata.tables))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; commit on normal exit, roll back on error."""
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except BaseException:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        await self._engine.dispose()
