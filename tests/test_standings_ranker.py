"""Unit tests for standings ordering and rank lookups."""
from types import SimpleNamespace

import pytest

from app.services.probability.standings_ranker import (
    calculate_rankings,
    conference_of,
    get_conference_rank,
    get_rank,
    ordinal_rank_label,
    sort_standings,
    win_percentage,
)


def row(team, wins, losses, pd=0, division="AFC_D1", manual_order=None):
    return SimpleNamespace(
        team=team, wins=wins, losses=losses, point_differential=pd,
        division=division, manual_order=manual_order,
    )


@pytest.fixture
def table():
    return [
        row("Bears", 0, 3, -30, "NFC_D1"),
        row("Comets", 2, 1, 10, "AFC_D1"),
        row("Aces", 3, 0, 30, "AFC_D1"),
        row("Dragons", 1, 2, -10, "NFC_D1"),
    ]


class TestWinPercentage:

    def test_regular_record(self):
        assert win_percentage(3, 1) == 0.75

    def test_no_games_uses_default(self):
        assert win_percentage(0, 0) == 0.0
        assert win_percentage(None, None, default=0.5) == 0.5


class TestOrdering:

    def test_orders_by_win_percentage(self, table):
        assert [s.team for s in sort_standings(table)] == ["Aces", "Comets", "Dragons", "Bears"]

    def test_point_differential_breaks_ties(self):
        rows = [row("Low", 2, 1, 5), row("High", 2, 1, 40), row("Mid", 2, 1, 12)]
        assert [s.team for s in sort_standings(rows)] == ["High", "Mid", "Low"]

    def test_manual_order_wins_when_every_row_has_one(self, table):
        for standing, order in zip(table, [1, 2, 3, 4]):
            standing.manual_order = order
        assert calculate_rankings(table) == {"Bears": 1, "Comets": 2, "Aces": 3, "Dragons": 4}

    def test_partial_manual_order_is_ignored(self, table):
        table[0].manual_order = 1  # Bears
        assert get_rank("Bears", table) == 4
        assert get_rank("Aces", table) == 1


class TestRankLookups:

    def test_missing_team_ranks_after_everyone(self, table):
        assert get_rank("Ghosts", table) == len(table) + 1

    def test_conference_of(self):
        assert conference_of("AFC_D1") == "AFC"
        assert conference_of("NFC") == "NFC"
        assert conference_of(None) == ""

    def test_conference_rank_only_counts_conference_peers(self, table):
        assert get_conference_rank("Dragons", table) == 1
        assert get_conference_rank("Bears", table) == 2
        assert get_conference_rank("Comets", table) == 2

    def test_ordinal_label(self, table):
        assert ordinal_rank_label("Aces", table) == "1st Overall"
        assert ordinal_rank_label("Dragons", table) == "3rd Overall"

    def test_ordinal_label_unranked(self, table):
        assert ordinal_rank_label("Ghosts", table) == "N/A"
        assert ordinal_rank_label("Aces", []) == "N/A"
