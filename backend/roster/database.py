"""
Employee Roster API: Storage Client
======================================

What:  The single process-wide handle to the employee store, plus the
       FastAPI dependencies that hand it (and per-request sessions) to routes.
Why:   One injectable object instead of a module-level engine, so tests can
       swap in their own client through `app.dependency_overrides`.
How:   StorageClient owns an async SQLAlchemy engine and session factory.
       It is constructed and connected in the application lifespan, stored
       on `app.state.storage`, and disposed at shutdown.

Connection lifecycle:
    connect()     → open engine, verify with SELECT 1, create tables, log
    ping()        → lightweight liveness probe used by /health
    disconnect()  → dispose pooled connections

    Reconnects are left to the pool (pool_pre_ping); there is no retry
    policy here, a fault surfaces as a failed request.
"""

import logging
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from roster.config import Settings, settings as default_settings
from roster.exceptions import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models share this metadata; StorageClient.connect() creates every
    table registered on it.
    """
    pass


def engine_options(config: Settings) -> Dict[str, Any]:
    """
    Build create_async_engine() keyword arguments for the configured URL.

    SQLite (tests) runs in-memory on one shared connection; every other
    backend gets the pool settings from configuration.
    """
    options: Dict[str, Any] = {"echo": config.log_level == "DEBUG"}
    if config.database_url.startswith("sqlite"):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = config.db_pool_size
        options["max_overflow"] = config.db_max_overflow
        options["pool_pre_ping"] = config.db_pool_pre_ping
        options["pool_recycle"] = 3600
    return options


class StorageClient:
    """
    Handle to the employee store.

    Constructed once at startup and shared by every request. Holds no
    per-request state; each request gets its own session from `session()`.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StorageError("Storage client is not connected")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        """
        Open the engine, verify the connection and create missing tables.

        Failures are logged and re-raised as StorageError so startup fails
        fast instead of leaving a process that cannot serve requests.
        """
        if self._engine is not None:
            return

        engine = create_async_engine(self.config.database_url, **engine_options(self.config))
        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                # Import registers the model on Base.metadata
                from roster.models import employee  # noqa: F401
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            await engine.dispose()
            logger.error("Could not connect to database: %s", e)
            raise StorageError.from_exception(e) from e

        self._engine = engine
        # expire_on_commit=False: records stay readable after commit, so the
        # route can serialize what it just saved without another query
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Connected with database (%s)", engine.url.render_as_string(hide_password=True))

    async def disconnect(self) -> None:
        """Close all pooled connections. Safe to call when not connected."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise StorageError("Storage client is not connected")
        return self._session_factory()

    async def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", e)
            return False


# ── Dependencies ──────────────────────────────────────────────────────────
def get_storage_client(request: Request) -> StorageClient:
    """
    FastAPI dependency returning the client create_app() placed on app state.

    Tests override this dependency to inject a client bound to SQLite.
    """
    client = getattr(request.app.state, "storage", None)
    if client is None:
        raise StorageError("Storage client is not connected")
    return client


async def get_db_session(
    client: StorageClient = Depends(get_storage_client),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Receives the storage client (overridable in tests)
        2. Yields a fresh session to the route and its dependencies
        3. On error: rolls back so no partial write survives
        4. Always: closes the session (returns connection to pool)

    Services commit their own writes; this dependency only guarantees
    cleanup. FastAPI caches it per request, so the id-resolution step and
    the operation share one session.
    """
    async with client.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
