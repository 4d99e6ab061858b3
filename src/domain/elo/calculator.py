"""Two-player Elo logic."""

from __future__ import annotations

from dataclasses import dataclass
from math import copysign, floor

from domain.common import GameOutcome, SideResult

DEFAULT_INITIAL_RATING = 1000
DEFAULT_K_FACTOR = 32.0
DEFAULT_SCALE_FACTOR = 400.0


@dataclass(frozen=True)
class EloParameters:
    initial_rating: int = DEFAULT_INITIAL_RATING
    k_factor: float = DEFAULT_K_FACTOR
    scale_factor: float = DEFAULT_SCALE_FACTOR


@dataclass(frozen=True)
class GameRatings:
    """Post-game ratings for both sides of one game."""

    new_rating_a: int
    new_rating_b: int
    expected_score_a: float
    expected_score_b: float
    actual_score_a: float
    actual_score_b: float
    games_increment: int = 1


def calculate_expected_score(
    rating: float,
    opponent_rating: float,
    scale_factor: float = DEFAULT_SCALE_FACTOR,
) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def actual_score(result: SideResult) -> float:
    if result is SideResult.WIN:
        return 1.0
    if result is SideResult.DRAW:
        return 0.5
    return 0.0


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, with .5 going away from zero (unlike round())."""
    return int(copysign(floor(abs(value) + 0.5), value))


def calculate_new_rating(
    rating: int,
    expected: float,
    actual: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> int:
    return round_half_away_from_zero(rating + k_factor * (actual - expected))


def side_results(outcome: GameOutcome) -> tuple[SideResult, SideResult]:
    """Split a game outcome into the per-side results for A and B."""
    if outcome is GameOutcome.A_WINS:
        return SideResult.WIN, SideResult.LOSS
    if outcome is GameOutcome.DRAW:
        return SideResult.DRAW, SideResult.DRAW
    raise ValueError(f"Unsupported game outcome: {outcome!r}")


def apply_game(
    rating_a: int,
    rating_b: int,
    outcome: GameOutcome,
    params: EloParameters = EloParameters(),
) -> GameRatings:
    """Rate one game between A and B.

    Both expected scores come from the pre-game ratings and each side is
    rounded on its own, so the rating sum is only conserved up to rounding.
    Every game counts once for both players whatever the outcome.
    """
    result_a, result_b = side_results(outcome)
    expected_a = calculate_expected_score(rating_a, rating_b, params.scale_factor)
    expected_b = calculate_expected_score(rating_b, rating_a, params.scale_factor)
    actual_a = actual_score(result_a)
    actual_b = actual_score(result_b)

    return GameRatings(
        new_rating_a=calculate_new_rating(rating_a, expected_a, actual_a, params.k_factor),
        new_rating_b=calculate_new_rating(rating_b, expected_b, actual_b, params.k_factor),
        expected_score_a=expected_a,
        expected_score_b=expected_b,
        actual_score_a=actual_a,
        actual_score_b=actual_b,
    )
