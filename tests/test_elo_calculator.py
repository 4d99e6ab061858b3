"""Unit tests for two-player Elo calculations."""

from __future__ import annotations

import pytest

from domain.common import GameOutcome, SideResult
from domain.elo.calculator import (
    EloParameters,
    actual_score,
    apply_game,
    calculate_expected_score,
    calculate_new_rating,
    round_half_away_from_zero,
    side_results,
)


def test_elo_parameters_defaults_are_expected_constants() -> None:
    params = EloParameters()
    assert params.initial_rating == 1000
    assert params.k_factor == pytest.approx(32.0)
    assert params.scale_factor == pytest.approx(400.0)


def test_expected_score_equal_ratings_is_half() -> None:
    assert calculate_expected_score(1000, 1000) == pytest.approx(0.5)


def test_expected_scores_sum_to_one() -> None:
    expected_a = calculate_expected_score(1200, 1000)
    expected_b = calculate_expected_score(1000, 1200)
    assert expected_a + expected_b == pytest.approx(1.0)
    assert expected_a > 0.5 > expected_b


def test_expected_score_four_hundred_points_is_ten_to_one() -> None:
    assert calculate_expected_score(1400, 1000) == pytest.approx(10.0 / 11.0)


def test_expected_score_stays_inside_open_interval() -> None:
    assert 0.0 < calculate_expected_score(0, 3000) < 1.0
    assert 0.0 < calculate_expected_score(3000, 0) < 1.0


def test_actual_score_per_side_result() -> None:
    assert actual_score(SideResult.WIN) == 1.0
    assert actual_score(SideResult.DRAW) == 0.5
    assert actual_score(SideResult.LOSS) == 0.0


def test_side_results_for_each_outcome() -> None:
    assert side_results(GameOutcome.A_WINS) == (SideResult.WIN, SideResult.LOSS)
    assert side_results(GameOutcome.DRAW) == (SideResult.DRAW, SideResult.DRAW)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1016.0, 1016),
        (1015.5, 1016),
        (1015.49, 1015),
        (984.5, 985),
        (-2.5, -3),
        (-2.4, -2),
        (0.5, 1),
    ],
)
def test_round_half_away_from_zero(value: float, expected: int) -> None:
    assert round_half_away_from_zero(value) == expected


def test_new_rating_rounds_ties_away_from_zero() -> None:
    # 1000 + 1 * (1.0 - 0.5) = 1000.5, which round() would take to 1000.
    assert calculate_new_rating(1000, 0.5, 1.0, k_factor=1.0) == 1001


def test_decisive_game_between_equal_players_moves_sixteen_points() -> None:
    ratings = apply_game(1000, 1000, GameOutcome.A_WINS)
    assert ratings.new_rating_a == 1016
    assert ratings.new_rating_b == 984
    assert ratings.expected_score_a == pytest.approx(0.5)
    assert ratings.expected_score_b == pytest.approx(0.5)
    assert ratings.games_increment == 1


def test_draw_between_equal_players_keeps_ratings() -> None:
    ratings = apply_game(1000, 1000, GameOutcome.DRAW)
    assert (ratings.new_rating_a, ratings.new_rating_b) == (1000, 1000)
    assert ratings.games_increment == 1


def test_draw_moves_unequal_players_towards_each_other() -> None:
    ratings = apply_game(1200, 1000, GameOutcome.DRAW)
    assert ratings.new_rating_a < 1200
    assert ratings.new_rating_b > 1000


def test_upset_moves_more_than_expected_win() -> None:
    upset = apply_game(1000, 1400, GameOutcome.A_WINS)
    expected_win = apply_game(1400, 1000, GameOutcome.A_WINS)
    assert upset.new_rating_a - 1000 > expected_win.new_rating_a - 1400


def test_expected_scores_use_pre_game_ratings() -> None:
    ratings = apply_game(1100, 900, GameOutcome.A_WINS)
    assert ratings.expected_score_a == pytest.approx(calculate_expected_score(1100, 900))
    assert ratings.expected_score_b == pytest.approx(calculate_expected_score(900, 1100))


@pytest.mark.parametrize(
    ("rating_a", "rating_b"),
    [(1000, 1000), (1234, 987), (1500, 800), (801, 1799)],
)
@pytest.mark.parametrize("outcome", list(GameOutcome))
def test_rating_sum_is_conserved_up_to_rounding(rating_a: int, rating_b: int, outcome: GameOutcome) -> None:
    ratings = apply_game(rating_a, rating_b, outcome)
    assert abs((ratings.new_rating_a + ratings.new_rating_b) - (rating_a + rating_b)) <= 1


def test_custom_k_factor_scales_the_delta() -> None:
    ratings = apply_game(1000, 1000, GameOutcome.A_WINS, EloParameters(k_factor=16.0))
    assert (ratings.new_rating_a, ratings.new_rating_b) == (1008, 992)


def test_unknown_outcome_raises() -> None:
    with pytest.raises(ValueError, match="Unsupported game outcome"):
        side_results("b_wins")  # type: ignore[arg-type]
