"""Unit tests for probability -> odds conversion and payouts."""
import pytest

from app.services.probability.odds import (
    MAX_ODDS,
    MIN_ODDS,
    calculate_odds,
    odds_to_multiplier,
    payout_for,
)


class TestCalculateOdds:

    @pytest.mark.parametrize("probability,expected", [
        (50, 2.00),
        (33, 3.03),
        (92, 1.10),   # 1.09 clamps up
        (8, 10.00),   # 12.50 clamps down
        (1, 10.00),
        (99, 1.10),
    ])
    def test_known_values(self, probability, expected):
        assert calculate_odds(probability) == pytest.approx(expected)

    def test_bounded_and_non_increasing(self):
        values = [calculate_odds(p) for p in range(1, 100)]
        assert all(MIN_ODDS <= v <= MAX_ODDS for v in values)
        assert all(a >= b for a, b in zip(values, values[1:]))


class TestMultiplierAndPayout:

    def test_multiplier_is_odds_times_100(self):
        assert odds_to_multiplier(2.0) == 200
        assert odds_to_multiplier(1.1) == 110
        assert odds_to_multiplier(3.03) == 303

    def test_payout_floors(self):
        assert payout_for(50, 200) == 100
        assert payout_for(15, 333) == 49
        assert payout_for(1, 110) == 1
