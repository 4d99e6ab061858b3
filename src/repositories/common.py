"""Helpers shared by the relational player stores."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Select, Update, exc, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from domain.common import Player
from domain.errors import StorageUnavailableError
from models import PlayerRow

logger = logging.getLogger(__name__)

# Connection loss, lock timeouts and pool exhaustion all mean the store cannot answer right now.
_UNAVAILABLE_ERRORS = (
    exc.OperationalError,
    exc.InterfaceError,
    exc.TimeoutError,
    exc.DisconnectionError,
    OSError,
)


def shares_one_connection(engine: Engine) -> bool:
    """True when every session on the engine runs over one DBAPI connection (sqlite :memory:)."""
    return isinstance(engine.pool, StaticPool)


def row_to_player(row: PlayerRow) -> Player:
    return Player(name=row.name, rating=int(row.rating), number_of_games=int(row.number_of_games))


def player_to_row(player: Player) -> dict[str, Any]:
    return {
        "name": player.name,
        "rating": player.rating,
        "number_of_games": player.number_of_games,
    }


def select_player_statement(name: str, *, for_update: bool = False) -> Select[tuple[PlayerRow]]:
    statement = select(PlayerRow).where(PlayerRow.name == name)
    if for_update:
        # Ignored by SQLite, where the write lock is taken at BEGIN instead.
        statement = statement.with_for_update()
    return statement


def update_player_statement(player: Player) -> Update:
    return (
        update(PlayerRow)
        .where(PlayerRow.name == player.name)
        .values(rating=player.rating, number_of_games=player.number_of_games)
        .execution_options(synchronize_session=False)
    )


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate driver and pool failures into StorageUnavailableError."""
    try:
        yield
    except _UNAVAILABLE_ERRORS as error:
        logger.error("Storage failure during %s", operation, exc_info=True)
        raise StorageUnavailableError(operation, str(error)) from error
