"""Record games against a player store as one all-or-nothing step."""

from __future__ import annotations

import logging

from domain.common import GameOutcome, GameRecord, Player, normalize_name
from domain.elo.calculator import EloParameters, apply_game
from domain.errors import PlayerAlreadyExistsError, PlayerNotFoundError, SelfPlayError
from domain.protocol import AsyncPlayerStore, PlayerStore

logger = logging.getLogger(__name__)


def _checked_pair(name_a: str, name_b: str) -> tuple[str, str]:
    name_a = normalize_name(name_a)
    name_b = normalize_name(name_b)
    if name_a == name_b:
        logger.warning("Rejected game of %s against themselves", name_a)
        raise SelfPlayError(name_a)
    return name_a, name_b


def _lock_order(name_a: str, name_b: str) -> tuple[str, str]:
    # Concurrent games over the same two rows must lock them in the same order.
    return (name_a, name_b) if name_a <= name_b else (name_b, name_a)


def _play(player_a: Player, player_b: Player, outcome: GameOutcome, params: EloParameters) -> GameRecord:
    ratings = apply_game(player_a.rating, player_b.rating, outcome, params)
    return GameRecord(
        player_a=player_a.after_game(ratings.new_rating_a, ratings.games_increment),
        player_b=player_b.after_game(ratings.new_rating_b, ratings.games_increment),
        expected_score_a=ratings.expected_score_a,
        expected_score_b=ratings.expected_score_b,
    )


def _log_recorded(record: GameRecord, outcome: GameOutcome) -> None:
    logger.info(
        "Recorded %s: %s -> %d, %s -> %d",
        outcome.value,
        record.player_a.name,
        record.player_a.rating,
        record.player_b.name,
        record.player_b.rating,
    )


def sort_leaderboard(players: list[Player]) -> list[Player]:
    return sorted(players, key=lambda player: (-player.rating, player.name))


class RatingSession:
    """Ladder operations over a blocking PlayerStore.

    The store is built once at startup and shared; the session holds no
    player state of its own and does not know which backend it is talking to.
    """

    def __init__(self, store: PlayerStore, params: EloParameters | None = None) -> None:
        self.store = store
        self.params = params or EloParameters()

    def create_player(self, name: str) -> Player:
        try:
            player = self.store.add_player(normalize_name(name))
        except PlayerAlreadyExistsError as exc:
            logger.warning("Player not created: %s", exc)
            raise
        logger.info("Created player %s with rating %d", player.name, player.rating)
        return player

    def get_player(self, name: str) -> Player:
        return self.store.get(normalize_name(name))

    def list_players(self) -> list[Player]:
        return self.store.list_players()

    def leaderboard(self) -> list[Player]:
        return sort_leaderboard(self.store.list_players())

    def record_game(
        self,
        name_a: str,
        name_b: str,
        outcome: GameOutcome = GameOutcome.A_WINS,
    ) -> GameRecord:
        """Rate one game between A and B and persist both players together.

        Raises PlayerNotFoundError before any write when either name is
        unknown. Storage failures surface unchanged; nothing is retried.
        """
        name_a, name_b = _checked_pair(name_a, name_b)
        try:
            with self.store.transaction() as transaction:
                fetched = {name: transaction.get(name) for name in _lock_order(name_a, name_b)}
                record = _play(fetched[name_a], fetched[name_b], outcome, self.params)
                transaction.update_player(record.player_a)
                transaction.update_player(record.player_b)
        except PlayerNotFoundError as exc:
            logger.warning("Game %s vs %s not recorded: %s", name_a, name_b, exc)
            raise
        _log_recorded(record, outcome)
        return record

    def close(self) -> None:
        self.store.close()


class AsyncRatingSession:
    """Asyncio twin of RatingSession over an AsyncPlayerStore."""

    def __init__(self, store: AsyncPlayerStore, params: EloParameters | None = None) -> None:
        self.store = store
        self.params = params or EloParameters()

    async def create_player(self, name: str) -> Player:
        try:
            player = await self.store.add_player(normalize_name(name))
        except PlayerAlreadyExistsError as exc:
            logger.warning("Player not created: %s", exc)
            raise
        logger.info("Created player %s with rating %d", player.name, player.rating)
        return player

    async def get_player(self, name: str) -> Player:
        return await self.store.get(normalize_name(name))

    async def list_players(self) -> list[Player]:
        return await self.store.list_players()

    async def leaderboard(self) -> list[Player]:
        return sort_leaderboard(await self.store.list_players())

    async def record_game(
        self,
        name_a: str,
        name_b: str,
        outcome: GameOutcome = GameOutcome.A_WINS,
    ) -> GameRecord:
        name_a, name_b = _checked_pair(name_a, name_b)
        try:
            async with self.store.transaction() as transaction:
                fetched = {name: await transaction.get(name) for name in _lock_order(name_a, name_b)}
                record = _play(fetched[name_a], fetched[name_b], outcome, self.params)
                await transaction.update_player(record.player_a)
                await transaction.update_player(record.player_b)
        except PlayerNotFoundError as exc:
            logger.warning("Game %s vs %s not recorded: %s", name_a, name_b, exc)
            raise
        _log_recorded(record, outcome)
        return record

    async def close(self) -> None:
        await self.store.close()


__all__ = ["AsyncRatingSession", "RatingSession", "sort_leaderboard"]
