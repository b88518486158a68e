from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import AppConfig
from .base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Wrapper around SQLAlchemy async engine/session creation to keep the rest of
    the codebase tidy.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        url = make_url(config.database.url)
        self._is_sqlite = url.get_backend_name() == "sqlite"

        engine_kwargs: Dict[str, Any] = {"echo": config.database.echo}
        if self._is_sqlite and url.database in (None, "", ":memory:"):
            # A single shared connection keeps an in-memory database alive.
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        elif self._is_sqlite:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self._engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self._engine, expire_on_commit=False, class_=AsyncSession
        )
        if self._is_sqlite:
            self._install_sqlite_pragmas()

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    async def create_all(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema synchronized")

    async def dispose(self) -> None:
        await self._engine.dispose()

    def _install_sqlite_pragmas(self) -> None:
        pragmas = self._config.database.sqlite_pragmas
        if not pragmas:
            return

        @event.listens_for(self._engine.sync_engine, "connect")
        def _apply_pragmas(dbapi_connection, _connection_record) -> None:
            cursor = dbapi_connection.cursor()
            for key, value in pragmas.items():
                cursor.execute(f"PRAGMA {key}={value}")
            cursor.close()


__all__ = ["Database"]
