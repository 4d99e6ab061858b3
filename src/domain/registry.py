"""Registry of available player store backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from db import create_async_db_engine, create_db_engine
from domain.config import LadderConfig
from domain.protocol import AsyncPlayerStore, PlayerStore, StoreBackend
from domain.session import AsyncRatingSession, RatingSession
from repositories.async_sql import AsyncSqlPlayerStore
from repositories.memory import InMemoryPlayerStore
from repositories.sql import SqlPlayerStore

CreateStoreFn = Callable[[LadderConfig], Any]


@dataclass(frozen=True)
class StoreDescriptor:
    """Everything required to stand up one store backend."""

    backend: StoreBackend
    is_async: bool
    persistent: bool
    create_store: CreateStoreFn


_REGISTRY: dict[StoreBackend, StoreDescriptor] = {}


def register(descriptor: StoreDescriptor) -> None:
    """Register one store descriptor."""
    if descriptor.backend in _REGISTRY:
        raise ValueError(f"Duplicate store descriptor registration for backend={descriptor.backend.value}")
    _REGISTRY[descriptor.backend] = descriptor


def get_all() -> list[StoreDescriptor]:
    """Return all registered descriptors in deterministic order."""
    return [_REGISTRY[key] for key in sorted(_REGISTRY.keys(), key=lambda item: item.value)]


def get(backend: StoreBackend | str) -> StoreDescriptor:
    """Get one registered descriptor by backend tag."""
    key = StoreBackend(backend)
    try:
        return _REGISTRY[key]
    except KeyError as exc:
        available = ", ".join(sorted(item.value for item in _REGISTRY))
        raise KeyError(
            f"No store descriptor registered for {key.value}. Available: {available}"
        ) from exc


def create_store(config: LadderConfig) -> PlayerStore | AsyncPlayerStore:
    return get(config.storage.backend).create_store(config)


def create_session(config: LadderConfig) -> RatingSession | AsyncRatingSession:
    """Build the store named by the config and wrap it in the matching session."""
    descriptor = get(config.storage.backend)
    store = descriptor.create_store(config)
    if descriptor.is_async:
        return AsyncRatingSession(store, config.parameters)
    return RatingSession(store, config.parameters)


def _require_db_url(config: LadderConfig) -> str:
    if not config.storage.db_url:
        raise ValueError(f"backend {config.storage.backend.value!r} requires a db_url")
    return config.storage.db_url


def _create_memory_store(config: LadderConfig) -> InMemoryPlayerStore:
    return InMemoryPlayerStore(initial_rating=config.parameters.initial_rating)


def _create_sql_store(config: LadderConfig) -> SqlPlayerStore:
    engine = create_db_engine(
        _require_db_url(config),
        pool_size=config.storage.pool_size,
        max_overflow=config.storage.max_overflow,
        pool_timeout=config.storage.pool_timeout,
    )
    return SqlPlayerStore(engine, initial_rating=config.parameters.initial_rating)


def _create_async_sql_store(config: LadderConfig) -> AsyncSqlPlayerStore:
    engine = create_async_db_engine(
        _require_db_url(config),
        pool_size=config.storage.pool_size,
        max_overflow=config.storage.max_overflow,
        pool_timeout=config.storage.pool_timeout,
    )
    return AsyncSqlPlayerStore(engine, initial_rating=config.parameters.initial_rating)


# (backend, is_async, persistent, create_store)
_BACKENDS: list[tuple[StoreBackend, bool, bool, CreateStoreFn]] = [
    (StoreBackend.MEMORY, False, False, _create_memory_store),
    (StoreBackend.SQL, False, True, _create_sql_store),
    (StoreBackend.ASYNC_SQL, True, True, _create_async_sql_store),
]


def _register_defaults() -> None:
    if _REGISTRY:
        return
    for backend, is_async, persistent, create in _BACKENDS:
        register(
            StoreDescriptor(
                backend=backend,
                is_async=is_async,
                persistent=persistent,
                create_store=create,
            )
        )


_register_defaults()

__all__ = [
    "StoreDescriptor",
    "create_session",
    "create_store",
    "get",
    "get_all",
    "register",
]
