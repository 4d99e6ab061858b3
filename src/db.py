"""Database engine/session helpers."""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

DEFAULT_POOL_SIZE = 5
DEFAULT_MAX_OVERFLOW = 0
DEFAULT_POOL_TIMEOUT = 30.0


def _is_sqlite(url: URL) -> bool:
    return url.get_backend_name() == "sqlite"


def _is_sqlite_memory(url: URL) -> bool:
    return _is_sqlite(url) and url.database in (None, "", ":memory:")


def _engine_options(
    url: URL,
    *,
    pool_size: int,
    max_overflow: int,
    pool_timeout: float,
    is_async: bool,
) -> dict[str, Any]:
    if _is_sqlite_memory(url):
        # Every connection to sqlite :memory: is a separate database, so share one.
        options: dict[str, Any] = {"poolclass": StaticPool}
        if not is_async:
            options["connect_args"] = {"check_same_thread": False}
        return options
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_timeout": pool_timeout,
        "pool_pre_ping": True,
    }


def _use_immediate_sqlite_transactions(engine: Engine) -> None:
    """Make SQLite take its write lock at BEGIN so read-then-write units serialize."""

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(connection: Any) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(
    db_url: str,
    *,
    pool_size: int = DEFAULT_POOL_SIZE,
    max_overflow: int = DEFAULT_MAX_OVERFLOW,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
) -> Engine:
    """Create a SQLAlchemy engine with a bounded connection pool."""
    url = make_url(db_url)
    engine = create_engine(
        url,
        future=True,
        **_engine_options(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            is_async=False,
        ),
    )
    if _is_sqlite(url):
        _use_immediate_sqlite_transactions(engine)
    return engine


def create_async_db_engine(
    db_url: str,
    *,
    pool_size: int = DEFAULT_POOL_SIZE,
    max_overflow: int = DEFAULT_MAX_OVERFLOW,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
) -> AsyncEngine:
    """Create an asyncio SQLAlchemy engine with a bounded connection pool."""
    url = make_url(db_url)
    engine = create_async_engine(
        url,
        **_engine_options(
            url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
            is_async=True,
        ),
    )
    if _is_sqlite(url):
        _use_immediate_sqlite_transactions(engine.sync_engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to the provided engine."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, future=True)


def create_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the provided engine."""
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
