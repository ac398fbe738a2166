"""
Bet ledger: coin balances and wager placement.

Rules:
- A bet's stake is debited when the bet is placed.
- The odds are locked at placement (stored ×100 as `multiplier`) and never
  recomputed, whatever happens to the standings afterwards.
- Balances never go below zero; a debit that would overdraw clamps to 0.
- Users without a recorded balance have DEFAULT_COINS.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core import metrics
from app.core.config import settings
from app.core.exceptions import (
    GameNotFoundError,
    InsufficientFundsError,
    UserNotFoundError,
    ValidationError,
)
from app.core.logging import get_logger
from app.models import Bet, User
from app.repositories import BetRepository, GameRepository, UserRepository
from app.services.betting.game_locks import game_locks
from app.services.probability.odds import MAX_ODDS, MIN_ODDS, odds_to_multiplier
from app.services.probability.win_probability import WinProbabilityService

logger = get_logger(__name__)


class BetLedger:
    """Places bets and moves coins between users and the house."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db, default_coins=settings.DEFAULT_COINS)
        self.bets = BetRepository(db)
        self.games = GameRepository(db)

    # ========================================================================
    # Balances
    # ========================================================================

    def get_balance(self, user_id: str) -> int:
        """Current coins; DEFAULT_COINS when the user has no recorded balance."""
        return self.users.balance_of(self.users.find_by_id(user_id))

    def credit_or_debit(self, user_id: str, delta: int) -> Optional[int]:
        """
        Apply `delta` inside the caller's transaction, clamping at zero.

        Returns the new balance, or None when the user no longer exists.
        """
        user = self.users.find_for_update(user_id)
        if user is None:
            logger.warning(f"Balance change of {delta} skipped: user {user_id} not found")
            return None

        new_balance, clamped = self.users.apply_delta(user, delta)
        if clamped:
            metrics.balance_clamped_coins_total.inc(clamped)
            logger.warning(
                f"Balance of user {user_id} floored at 0; {clamped} coins could not be debited",
                extra={"user_id": user_id, "delta": delta, "clamped": clamped},
            )
        return new_balance

    def adjust_balance(self, user_id: str, delta: int) -> int:
        """Add (or with a negative delta, remove) coins and commit. Never goes below zero."""
        try:
            new_balance = self.credit_or_debit(user_id, delta)
            if new_balance is None:
                raise UserNotFoundError(user_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Adjusted balance of user {user_id} by {delta} to {new_balance}")
        return new_balance

    def set_balance(self, user_id: str, amount: int) -> int:
        """Overwrite a user's balance (admin)."""
        if amount < 0:
            raise ValidationError("Balance cannot be negative")
        try:
            user = self.users.find_for_update(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            user.coins = amount
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(f"Set balance of user {user_id} to {amount}")
        return amount

    def leaderboard(self, limit: Optional[int] = None) -> List[User]:
        return self.users.top_by_coins(limit or settings.LEADERBOARD_SIZE)

    # ========================================================================
    # Bets
    # ========================================================================

    def get_user_bets(self, user_id: str) -> List[Bet]:
        return self.bets.find_by_user(user_id)

    def place_bet(
        self,
        user_id: str,
        game_id: str,
        picked_team: str,
        amount: int,
        odds: Optional[float] = None,
    ) -> Bet:
        """
        Debit the stake and record a pending bet.

        Args:
            user_id: Bettor
            game_id: Game being bet on
            picked_team: team1 or team2 of that game, by name
            amount: Stake in coins, a positive integer
            odds: Decimal odds shown to the user; computed from the current
                win probability when omitted

        Raises:
            ValidationError: bad amount/team/odds, or the game is already final
            GameNotFoundError: no such game
            InsufficientFundsError: stake larger than the balance
        """
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            metrics.record_bet_rejected("invalid_amount")
            raise ValidationError("Bet amount must be a positive whole number of coins")
        if not picked_team:
            metrics.record_bet_rejected("missing_team")
            raise ValidationError("pickedTeam is required")

        with game_locks.hold(game_id):
            try:
                bet = self._place_locked(user_id, game_id, picked_team, amount, odds)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(bet)
        metrics.record_bet_placed(amount)
        logger.info(
            f"User {user_id} bet {amount} on {picked_team} at {bet.multiplier / 100:.2f}x",
            extra={"user_id": user_id, "game_id": game_id, "bet_id": bet.id},
        )
        return bet

    def _place_locked(
        self,
        user_id: str,
        game_id: str,
        picked_team: str,
        amount: int,
        odds: Optional[float],
    ) -> Bet:
        game = self.games.find_for_update(game_id)
        if game is None:
            metrics.record_bet_rejected("game_not_found")
            raise GameNotFoundError(game_id)
        if picked_team not in (game.team1, game.team2):
            metrics.record_bet_rejected("unknown_team")
            raise ValidationError(f"{picked_team} is not playing in this game")
        if game.is_final:
            metrics.record_bet_rejected("game_final")
            raise ValidationError("Betting is closed for a final game")

        if odds is None:
            odds = WinProbabilityService(self.db).odds_for(game, picked_team)
        elif not (MIN_ODDS <= odds <= MAX_ODDS):
            metrics.record_bet_rejected("invalid_odds")
            raise ValidationError(f"Odds must be between {MIN_ODDS:.2f} and {MAX_ODDS:.2f}")

        user = self.users.find_for_update(user_id)
        if user is None:
            metrics.record_bet_rejected("user_not_found")
            raise UserNotFoundError(user_id)

        balance = self.users.balance_of(user)
        if amount > balance:
            metrics.record_bet_rejected("insufficient_funds")
            raise InsufficientFundsError(balance, amount)

        self.users.apply_delta(user, -amount)
        return self.bets.create(
            user_id=user_id,
            game_id=game_id,
            amount=amount,
            picked_team=picked_team,
            multiplier=odds_to_multiplier(odds),
            won=None,
            status="pending",
        )
