"""Shared types for the rating ladder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GameOutcome(str, Enum):
    """Result of a game from the point of view of side A."""

    A_WINS = "a_wins"
    DRAW = "draw"


class SideResult(str, Enum):
    """Result of a game for one side."""

    WIN = "win"
    DRAW = "draw"
    LOSS = "loss"


@dataclass(frozen=True)
class Player:
    """Rating state of one named player."""

    name: str
    rating: int
    number_of_games: int = 0

    def after_game(self, new_rating: int, games_increment: int = 1) -> Player:
        """Return this player with a post-game rating and game count."""
        return Player(
            name=self.name,
            rating=new_rating,
            number_of_games=self.number_of_games + games_increment,
        )


@dataclass(frozen=True)
class GameRecord:
    """Both participants of one recorded game, as committed."""

    player_a: Player
    player_b: Player
    expected_score_a: float
    expected_score_b: float

    def players(self) -> tuple[Player, Player]:
        return self.player_a, self.player_b


def normalize_name(name: str) -> str:
    """Strip a player name and reject empty ones."""
    normalized = name.strip()
    if not normalized:
        raise ValueError("player name must not be empty")
    return normalized
