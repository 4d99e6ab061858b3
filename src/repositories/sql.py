"""Blocking relational player store using SQLAlchemy."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from db import create_session_factory
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


def ensure_player_schema(engine: Engine) -> None:
    """Create the players table if it does not exist."""
    with storage_errors("ensure_schema"):
        Base.metadata.create_all(bind=engine, tables=[PlayerRow.__table__])


class SqlPlayerTransaction:
    """Row reads and writes inside one open database transaction."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, name: str) -> Player:
        row = self.session.execute(select_player_statement(name, for_update=True)).scalar_one_or_none()
        if row is None:
            raise PlayerNotFoundError(name)
        return row_to_player(row)

    def update_player(self, player: Player) -> None:
        result = self.session.execute(update_player_statement(player))
        if result.rowcount == 0:
            raise PlayerNotFoundError(player.name)


class SqlPlayerStore:
    """One row per player in the players table.

    On a single-connection engine (sqlite :memory:) sessions take turns, since
    a second BEGIN on the shared connection would tear the first transaction.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        session_factory: sessionmaker[Session] | None = None,
        initial_rating: int = DEFAULT_INITIAL_RATING,
    ) -> None:
        self.engine = engine
        self.session_factory = session_factory or create_session_factory(engine)
        self.initial_rating = initial_rating
        self._connection_turn: AbstractContextManager[Any] = (
            threading.Lock() if shares_one_connection(engine) else nullcontext()
        )

    def add_player(self, name: str) -> Player:
        player = Player(name=name, rating=self.initial_rating, number_of_games=0)
        with storage_errors("add_player"), self._connection_turn:
            try:
                with self.session_factory.begin() as session:
                    session.execute(insert(PlayerRow).values(**player_to_row(player)))
            except IntegrityError as exc:
                raise PlayerAlreadyExistsError(name) from exc
        logger.debug("Inserted player %s", name)
        return player

    def get(self, name: str) -> Player:
        with storage_errors("get"), self._connection_turn:
            with self.session_factory() as session:
                row = session.execute(select_player_statement(name)).scalar_one_or_none()
                if row is None:
                    raise PlayerNotFoundError(name)
                return row_to_player(row)

    def update_player(self, player: Player) -> None:
        with storage_errors("update_player"), self._connection_turn:
            with self.session_factory.begin() as session:
                SqlPlayerTransaction(session).update_player(player)

    def list_players(self) -> list[Player]:
        with storage_errors("list_players"), self._connection_turn:
            with self.session_factory() as session:
                rows = session.execute(select(PlayerRow)).scalars().all()
                return [row_to_player(row) for row in rows]

    @contextmanager
    def transaction(self) -> Iterator[SqlPlayerTransaction]:
        """Run the block in one database transaction; commit on exit, roll back on error.

        Not reentrant: do not call other store methods inside the block.
        """
        with storage_errors("transaction"), self._connection_turn:
            with self.session_factory.begin() as session:
                yield SqlPlayerTransaction(session)

    def ensure_schema(self) -> None:
        with self._connection_turn:
            ensure_player_schema(self.engine)

    def close(self) -> None:
        self.engine.dispose()
