"""Unit tests for the win-probability model.

Reference table (4 teams):
    Aces 3-0 +30 (rank 1), Comets 2-1 +10, Dragons 1-2 -10, Bears 0-3 -30 (rank 4)

Aces vs Bears before kickoff:
    ranking (1.00 - 0.25) × 40 = 30   × .40
    pd      60 / 30 × 25       = 50   × .25
    record  1.0 × 50           = 50   × .35
    sos     0                         × .30
    → 50 + 42 = 92
"""
from types import SimpleNamespace

import pytest

from app.core.exceptions import ValidationError
from app.services.probability.win_probability import (
    TeamAnalysis,
    base_probability,
    calculate_win_probability,
    get_win_probability_factors,
    quarter_weight,
)


def standing(team, wins, losses, pd, division="AFC_D1"):
    return SimpleNamespace(
        team=team, wins=wins, losses=losses, point_differential=pd,
        division=division, manual_order=None,
    )


def game(quarter="Scheduled", team1_score=0, team2_score=0, team1="Aces", team2="Bears"):
    return SimpleNamespace(
        team1=team1, team2=team2, team1_score=team1_score,
        team2_score=team2_score, quarter=quarter, is_final=False,
    )


@pytest.fixture
def standings():
    return [
        standing("Aces", 3, 0, 30),
        standing("Comets", 2, 1, 10),
        standing("Dragons", 1, 2, -10, "NFC_D1"),
        standing("Bears", 0, 3, -30, "NFC_D1"),
    ]


class TestPreGame:

    def test_favourite_above_even(self, standings):
        p1 = calculate_win_probability(game(), "team1", standings, [])
        p2 = calculate_win_probability(game(), "team2", standings, [])
        assert p1 == 92
        assert p2 == 100 - p1

    def test_no_standings_is_a_coin_flip(self):
        assert calculate_win_probability(game(), "team1", [], []) == 50
        assert calculate_win_probability(game(), "team2", None, None) == 50

    def test_invalid_side(self, standings):
        with pytest.raises(ValidationError):
            calculate_win_probability(game(), "home", standings, [])

    def test_weights_when_neither_team_has_played(self):
        team1 = TeamAnalysis(ranking=1, win_percentage=0.5, point_differential=0, schedule_strength=0.5, total_games_played=0)
        team2 = TeamAnalysis(ranking=2, win_percentage=0.5, point_differential=0, schedule_strength=0.5, total_games_played=0)
        # ranking (1.0 - 0.5) × 40 × .70 = 14
        assert base_probability(team1, team2, 2) == pytest.approx(64)

    def test_unknown_team_ranks_last(self, standings):
        p = calculate_win_probability(game(team2="Ghosts"), "team1", standings, [])
        assert p > 50


class TestLiveAdjustment:

    def test_late_blowout(self, standings):
        # Q4, +28: weight min(.60, .90 + .10) = .60, score impact 40 × 1.3 = 52
        # 92 × .4 + 102 × .6 = 98
        assert calculate_win_probability(game("Q4", 28, 0), "team1", standings, []) == 98

    def test_clamped_to_one_and_ninety_nine(self, standings):
        assert calculate_win_probability(game("Q4", 0, 63), "team1", standings, []) == 1
        assert calculate_win_probability(game("Q4", 0, 63), "team2", standings, []) == 99

    @pytest.mark.parametrize("quarter,score1,score2", [
        ("Scheduled", 0, 0),
        ("Q1", 7, 0),
        ("2nd", 3, 17),
        ("3rd", 24, 24),
        ("OT", 30, 27),
        ("Halftime", 10, 13),
    ])
    def test_sides_always_sum_to_100(self, standings, quarter, score1, score2):
        g = game(quarter, score1, score2)
        p1 = calculate_win_probability(g, "team1", standings, [])
        p2 = calculate_win_probability(g, "team2", standings, [])
        assert p1 + p2 == 100
        assert 1 <= p1 <= 99

    @pytest.mark.parametrize("quarter,diff,expected", [
        ("Q1", 0, 0.25),
        ("1st", 7, 0.25),
        ("4th", 0, 0.90),
        ("Q4", 28, 0.60),
        ("Q4", 36, 0.75),
        ("Q1", 36, 0.45),
        ("Q2", 22, 0.55),
        ("Halftime", 0, 0.50),
    ])
    def test_quarter_weight(self, quarter, diff, expected):
        assert quarter_weight(quarter, diff) == pytest.approx(expected)


class TestFactors:

    def test_factor_breakdown(self, standings):
        factors = get_win_probability_factors(game(), standings, [])

        assert factors["team1"]["ranking"] == 1
        assert factors["team2"]["ranking"] == 4
        assert factors["factors"]["record"] == {
            "team1Record": "3-0",
            "team2Record": "0-3",
            "advantage": "Aces",
        }
        assert factors["factors"]["pointDiff"]["advantage"] == "Aces"
        assert factors["factors"]["schedule"]["advantage"] == "Even"
        assert factors["factors"]["schedule"]["team1SOS"] == 50

    def test_no_standings_no_factors(self):
        assert get_win_probability_factors(game(), [], []) is None
