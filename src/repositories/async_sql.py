"""Asyncio relational player store using SQLAlchemy's asyncio extension."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager, nullcontext
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from db import create_async_session_factory
from domain.common import Player
from domain.elo.calculator import DEFAULT_INITIAL_RATING
from domain.errors import PlayerAlreadyExistsError, PlayerNotFoundError
from models import Base, PlayerRow
from repositories.common import (
    player_to_row,
    row_to_player,
    select_player_statement,
    shares_one_connection,
    storage_errors,
    update_player_statement,
)

logger = logging.getLogger(__name__)


async def ensure_player_schema_async(engine: AsyncEngine) -> None:
    """Create the players table if it does not exist."""
    with storage_errors("ensure_schema"):
        async with engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all, tables=[PlayerRow.__table__])


class AsyncSqlPlayerTransaction:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, name: str) -> Player:
        result = await self.session.execute(select_player_statement(name, for_update=True))
        row = result.scalar_one_or_none()
        if row is None:
            raise PlayerNotFoundError(name)
        return row_to_player(row)

    async def update_player(self, player: Player) -> None:
        result = await self.session.execute(update_player_statement(player))
        if result.rowcount == 0:
            raise PlayerNotFoundError(player.name)


class AsyncSqlPlayerStore:
    """Same table and semantics as SqlPlayerStore; awaits instead of blocking."""

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        initial_rating: int = DEFAULT_INITIAL_RATING,
    ) -> None:
        self.engine = engine
        self.session_factory = session_factory or create_async_session_factory(engine)
        self.initial_rating = initial_rating
        self._connection_turn: AbstractAsyncContextManager[Any] = (
            asyncio.Lock() if shares_one_connection(engine.sync_engine) else nullcontext()
        )

    async def add_player(self, name: str) -> Player:
        player = Player(name=name, rating=self.initial_rating, number_of_games=0)
        with storage_errors("add_player"):
            async with self._connection_turn:
                try:
                    async with self.session_factory.begin() as session:
                        await session.execute(insert(PlayerRow).values(**player_to_row(player)))
                except IntegrityError as exc:
                    raise PlayerAlreadyExistsError(name) from exc
        logger.debug("Inserted player %s", name)
        return player

    async def get(self, name: str) -> Player:
        with storage_errors("get"):
            async with self._connection_turn, self.session_factory() as session:
                result = await session.execute(select_player_statement(name))
                row = result.scalar_one_or_none()
                if row is None:
                    raise PlayerNotFoundError(name)
                return row_to_player(row)

    async def update_player(self, player: Player) -> None:
        with storage_errors("update_player"):
            async with self._connection_turn, self.session_factory.begin() as session:
                await AsyncSqlPlayerTransaction(session).update_player(player)

    async def list_players(self) -> list[Player]:
        with storage_errors("list_players"):
            async with self._connection_turn, self.session_factory() as session:
                result = await session.execute(select(PlayerRow))
                return [row_to_player(row) for row in result.scalars().all()]

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSqlPlayerTransaction]:
        with storage_errors("transaction"):
            async with self._connection_turn, self.session_factory.begin() as session:
                yield AsyncSqlPlayerTransaction(session)

    async def ensure_schema(self) -> None:
        async with self._connection_turn:
            await ensure_player_schema_async(self.engine)

    async def close(self) -> None:
        await self.engine.dispose()
