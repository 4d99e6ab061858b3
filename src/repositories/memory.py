"""Process-local player store."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from domain.common import Player
from domain.elo.calculator import DEFAULT_INITIAL_RATING
from domain.errors import PlayerAlreadyExistsError, PlayerNotFoundError
from repositories.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class InMemoryPlayerTransaction:
    """Staged writes against the map; the owning store holds the write lock."""

    def __init__(self, players: dict[str, Player]) -> None:
        self._players = players
        self.staged: dict[str, Player] = {}

    def get(self, name: str) -> Player:
        player = self.staged.get(name) or self._players.get(name)
        if player is None:
            raise PlayerNotFoundError(name)
        return player

    def update_player(self, player: Player) -> None:
        if player.name not in self._players:
            raise PlayerNotFoundError(player.name)
        self.staged[player.name] = player


class InMemoryPlayerStore:
    """Players in a dict guarded by a read-many / write-one lock.

    Construct one per process and hand it to whoever needs it.
    """

    def __init__(self, *, initial_rating: int = DEFAULT_INITIAL_RATING) -> None:
        self.initial_rating = initial_rating
        self._players: dict[str, Player] = {}
        self._lock = ReadWriteLock()

    def add_player(self, name: str) -> Player:
        with self._lock.write():
            if name in self._players:
                raise PlayerAlreadyExistsError(name)
            player = Player(name=name, rating=self.initial_rating, number_of_games=0)
            self._players[name] = player
        logger.debug("Added player %s to in-memory store", name)
        return player

    def get(self, name: str) -> Player:
        with self._lock.read():
            player = self._players.get(name)
        if player is None:
            raise PlayerNotFoundError(name)
        return player

    def update_player(self, player: Player) -> None:
        with self._lock.write():
            if player.name not in self._players:
                raise PlayerNotFoundError(player.name)
            self._players[player.name] = player

    def list_players(self) -> list[Player]:
        with self._lock.read():
            return list(self._players.values())

    @contextmanager
    def transaction(self) -> Iterator[InMemoryPlayerTransaction]:
        """Hold the write lock for the whole unit and apply staged writes on success."""
        with self._lock.write():
            transaction = InMemoryPlayerTransaction(self._players)
            yield transaction
            self._players.update(transaction.staged)

    def ensure_schema(self) -> None:
        return None

    def close(self) -> None:
        return None
