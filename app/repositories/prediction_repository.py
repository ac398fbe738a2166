"""
Fan prediction repository.
"""
from typing import Dict, List, Optional

from sqlalchemy import func

from app.models import Prediction
from app.repositories.base import BaseRepository


class PredictionRepository(BaseRepository[Prediction]):
    """Repository for who-wins votes on games."""

    def __init__(self, db):
        super().__init__(Prediction, db)

    def find_by_game(self, game_id: str) -> List[Prediction]:
        return self.query().filter(Prediction.game_id == game_id).order_by(Prediction.created_at).all()

    def find_for_user(self, user_id: str, game_id: str) -> Optional[Prediction]:
        return self.where_first(Prediction.user_id == user_id, Prediction.game_id == game_id)

    def tally(self, game_id: str) -> Dict[str, int]:
        """Votes per team name."""
        rows = (
            self.db.query(Prediction.voted_for, func.count(Prediction.id))
            .filter(Prediction.game_id == game_id)
            .group_by(Prediction.voted_for)
            .all()
        )
        return {team: votes for team, votes in rows}
