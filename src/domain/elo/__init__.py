"""Elo rating modules."""

from domain.elo.calculator import (
    EloParameters,
    GameRatings,
    actual_score,
    apply_game,
    calculate_expected_score,
    calculate_new_rating,
)

__all__ = [
    "EloParameters",
    "GameRatings",
    "actual_score",
    "apply_game",
    "calculate_expected_score",
    "calculate_new_rating",
]
