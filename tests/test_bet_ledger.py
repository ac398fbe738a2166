"""Service tests for bet placement and coin balances."""
import pytest

from app.core.exceptions import (
    GameNotFoundError,
    InsufficientFundsError,
    UserNotFoundError,
    ValidationError,
)
from app.models import Bet
from app.services.betting import BetLedger


class TestPlaceBet:

    def test_insufficient_funds_changes_nothing(self, db_session, users, scheduled_game):
        ledger = BetLedger(db_session)
        alice = users["alice"]

        with pytest.raises(InsufficientFundsError):
            ledger.place_bet(alice.id, scheduled_game.id, "Aces", 150, odds=2.0)

        assert ledger.get_balance(alice.id) == 100
        assert db_session.query(Bet).count() == 0

    def test_debits_stake_and_locks_odds(self, db_session, users, scheduled_game):
        ledger = BetLedger(db_session)
        alice = users["alice"]

        bet = ledger.place_bet(alice.id, scheduled_game.id, "Aces", 50, odds=2.0)

        assert ledger.get_balance(alice.id) == 50
        assert bet.multiplier == 200
        assert bet.won is None
        assert bet.status == "pending"
        assert bet.amount == 50
        assert bet.picked_team == "Aces"

    def test_odds_default_to_current_probability(self, db_session, users, four_team_standings, scheduled_game):
        ledger = BetLedger(db_session)

        favourite = ledger.place_bet(users["bob"].id, scheduled_game.id, "Aces", 10)
        underdog = ledger.place_bet(users["bob"].id, scheduled_game.id, "Bears", 10)

        # 92% -> 1.09 clamps to 1.10; 8% -> 12.50 clamps to 10.00
        assert favourite.multiplier == 110
        assert underdog.multiplier == 1000

    def test_default_balance_for_new_user(self, db_session, users, scheduled_game):
        ledger = BetLedger(db_session)
        bob = users["bob"]

        assert ledger.get_balance(bob.id) == 1000
        ledger.place_bet(bob.id, scheduled_game.id, "Bears", 100, odds=3.0)
        assert ledger.get_balance(bob.id) == 900

    def test_exact_balance_is_allowed(self, db_session, users, scheduled_game):
        ledger = BetLedger(db_session)
        ledger.place_bet(users["alice"].id, scheduled_game.id, "Aces", 100, odds=2.0)
        assert ledger.get_balance(users["alice"].id) == 0

    @pytest.mark.parametrize("amount", [0, -5, 2.5, True])
    def test_rejects_bad_amounts(self, db_session, users, scheduled_game, amount):
        with pytest.raises(ValidationError):
            BetLedger(db_session).place_bet(users["alice"].id, scheduled_game.id, "Aces", amount, odds=2.0)

    def test_rejects_team_not_in_game(self, db_session, users, scheduled_game):
        with pytest.raises(ValidationError):
            BetLedger(db_session).place_bet(users["alice"].id, scheduled_game.id, "Comets", 10, odds=2.0)

    @pytest.mark.parametrize("odds", [1.0, 10.5])
    def test_rejects_out_of_range_odds(self, db_session, users, scheduled_game, odds):
        with pytest.raises(ValidationError):
            BetLedger(db_session).place_bet(users["alice"].id, scheduled_game.id, "Aces", 10, odds=odds)

    def test_rejects_final_game(self, db_session, users, make_game):
        game = make_game(is_final=True, team1_score=21, team2_score=14, quarter="FINAL")
        with pytest.raises(ValidationError):
            BetLedger(db_session).place_bet(users["alice"].id, game.id, "Aces", 10, odds=2.0)
        assert BetLedger(db_session).get_balance(users["alice"].id) == 100

    def test_unknown_game(self, db_session, users):
        with pytest.raises(GameNotFoundError):
            BetLedger(db_session).place_bet(users["alice"].id, "no-such-game", "Aces", 10, odds=2.0)

    def test_user_bets_newest_first(self, db_session, users, scheduled_game):
        ledger = BetLedger(db_session)
        first = ledger.place_bet(users["bob"].id, scheduled_game.id, "Aces", 10, odds=2.0)
        second = ledger.place_bet(users["bob"].id, scheduled_game.id, "Bears", 20, odds=2.0)

        assert [b.id for b in ledger.get_user_bets(users["bob"].id)] == [second.id, first.id]


class TestBalances:

    def test_adjust_balance(self, db_session, users):
        ledger = BetLedger(db_session)
        assert ledger.adjust_balance(users["alice"].id, 25) == 125
        assert ledger.adjust_balance(users["alice"].id, -25) == 100

    def test_debit_clamps_at_zero(self, db_session, users):
        ledger = BetLedger(db_session)
        assert ledger.adjust_balance(users["alice"].id, -500) == 0
        assert ledger.get_balance(users["alice"].id) == 0

    def test_adjust_unknown_user(self, db_session, users):
        with pytest.raises(UserNotFoundError):
            BetLedger(db_session).adjust_balance("nobody", 10)

    def test_set_balance(self, db_session, users):
        ledger = BetLedger(db_session)
        assert ledger.set_balance(users["bob"].id, 42) == 42
        assert ledger.get_balance(users["bob"].id) == 42

        with pytest.raises(ValidationError):
            ledger.set_balance(users["bob"].id, -1)

    def test_leaderboard_counts_default_balance(self, db_session, users):
        board = BetLedger(db_session).leaderboard()

        assert len(board) == 3
        assert board[-1].username == "alice"
        assert {u.username for u in board[:2]} == {"commish", "bob"}
