"""
Bet repository.

The settlement queries filter strictly on `won IS NULL` / `won IS NOT NULL`;
that filter is what keeps a second finalize from paying a bet twice.
"""
from typing import List

from app.models import Bet
from app.repositories.base import BaseRepository


class BetRepository(BaseRepository[Bet]):
    """Repository for coin wagers."""

    def __init__(self, db):
        super().__init__(Bet, db)

    def find_by_user(self, user_id: str) -> List[Bet]:
        """A user's bets, newest first."""
        return (
            self.db.query(Bet)
            .filter(Bet.user_id == user_id)
            .order_by(Bet.created_at.desc(), Bet.id.desc())
            .all()
        )

    def find_unresolved_for_game(self, game_id: str) -> List[Bet]:
        """Pending bets of a game, row-locked for the settlement transaction."""
        return (
            self.db.query(Bet)
            .filter(Bet.game_id == game_id, Bet.won.is_(None))
            .order_by(Bet.id)
            .with_for_update()
            .populate_existing()
            .all()
        )

    def find_resolved_for_game(self, game_id: str) -> List[Bet]:
        """Settled bets of a game, row-locked for the reversal transaction."""
        return (
            self.db.query(Bet)
            .filter(Bet.game_id == game_id, Bet.won.isnot(None))
            .order_by(Bet.id)
            .with_for_update()
            .populate_existing()
            .all()
        )
