"""Store contracts shared by every ladder backend."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager, AbstractContextManager
from enum import Enum
from typing import Protocol, runtime_checkable

from domain.common import Player


class StoreBackend(str, Enum):
    """Which medium holds the player records."""

    MEMORY = "memory"
    SQL = "sql"
    ASYNC_SQL = "async_sql"


@runtime_checkable
class PlayerStoreTransaction(Protocol):
    """Reads and writes that become visible together, or not at all."""

    def get(self, name: str) -> Player: ...

    def update_player(self, player: Player) -> None: ...


@runtime_checkable
class PlayerStore(Protocol):
    """Blocking player store contract."""

    def add_player(self, name: str) -> Player: ...

    def get(self, name: str) -> Player: ...

    def update_player(self, player: Player) -> None: ...

    def list_players(self) -> list[Player]: ...

    def transaction(self) -> AbstractContextManager[PlayerStoreTransaction]: ...

    def ensure_schema(self) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class AsyncPlayerStoreTransaction(Protocol):
    async def get(self, name: str) -> Player: ...

    async def update_player(self, player: Player) -> None: ...


@runtime_checkable
class AsyncPlayerStore(Protocol):
    """Asyncio player store contract; same semantics as PlayerStore."""

    async def add_player(self, name: str) -> Player: ...

    async def get(self, name: str) -> Player: ...

    async def update_player(self, player: Player) -> None: ...

    async def list_players(self) -> list[Player]: ...

    def transaction(self) -> AbstractAsyncContextManager[AsyncPlayerStoreTransaction]: ...

    async def ensure_schema(self) -> None: ...

    async def close(self) -> None: ...


__all__ = [
    "AsyncPlayerStore",
    "AsyncPlayerStoreTransaction",
    "PlayerStore",
    "PlayerStoreTransaction",
    "StoreBackend",
]
