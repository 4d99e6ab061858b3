"""Player store implementations."""

from repositories.async_sql import AsyncSqlPlayerStore, ensure_player_schema_async
from repositories.memory import InMemoryPlayerStore
from repositories.sql import SqlPlayerStore, ensure_player_schema

__all__ = [
    "AsyncSqlPlayerStore",
    "InMemoryPlayerStore",
    "SqlPlayerStore",
    "ensure_player_schema",
    "ensure_player_schema_async",
]
