"""Shared store fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio

from db import create_async_db_engine, create_db_engine
from repositories.async_sql import AsyncSqlPlayerStore
from repositories.memory import InMemoryPlayerStore
from repositories.sql import SqlPlayerStore


def make_sql_store(db_url: str = "sqlite://", **engine_options: float) -> SqlPlayerStore:
    store = SqlPlayerStore(create_db_engine(db_url, **engine_options))
    store.ensure_schema()
    return store


@pytest.fixture
def memory_store() -> InMemoryPlayerStore:
    return InMemoryPlayerStore()


@pytest.fixture
def sql_store() -> Iterator[SqlPlayerStore]:
    store = make_sql_store()
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest) -> Iterator[InMemoryPlayerStore | SqlPlayerStore]:
    if request.param == "memory":
        yield InMemoryPlayerStore()
        return
    store = make_sql_store()
    yield store
    store.close()


@pytest_asyncio.fixture
async def async_store() -> AsyncIterator[AsyncSqlPlayerStore]:
    store = AsyncSqlPlayerStore(create_async_db_engine("sqlite+aiosqlite://"))
    await store.ensure_schema()
    yield store
    await store.close()


def _sqlite_url(kind: str, tmp_path: Path, driver: str = "sqlite") -> str:
    if kind == "memory-db":
        return f"{driver}://"
    return f"{driver}:///{tmp_path / 'ladder.db'}"


@pytest.fixture(params=["memory-db", "file-db"])
def threaded_sql_store(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[SqlPlayerStore]:
    """Relational store for multi-threaded tests, over one shared connection or a real pool."""
    store = make_sql_store(_sqlite_url(request.param, tmp_path))
    yield store
    store.close()


@pytest_asyncio.fixture(params=["memory-db", "file-db"])
async def concurrent_async_store(
    request: pytest.FixtureRequest, tmp_path: Path
) -> AsyncIterator[AsyncSqlPlayerStore]:
    store = AsyncSqlPlayerStore(
        create_async_db_engine(_sqlite_url(request.param, tmp_path, driver="sqlite+aiosqlite"))
    )
    await store.ensure_schema()
    yield store
    await store.close()
