"""
Fan predictions: a free who-wins vote on a game, one per user, no coins.
"""
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import GameNotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import Prediction
from app.repositories import GameRepository, PredictionRepository

logger = get_logger(__name__)


def serialize_prediction(prediction: Prediction) -> dict:
    return {
        "id": prediction.id,
        "gameId": prediction.game_id,
        "userId": prediction.user_id,
        "votedFor": prediction.voted_for,
        "createdAt": prediction.created_at.isoformat() if prediction.created_at else None,
    }


class PredictionService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PredictionRepository(db)
        self.games = GameRepository(db)

    def summary(self, game_id: str) -> Dict[str, Any]:
        """
        Every vote on a game plus the split between its two teams.

        Percentages are whole numbers summing to 100, or both 0 without votes.
        """
        game = self.games.find_by_id(game_id)
        if game is None:
            raise GameNotFoundError(game_id)

        tally = self.repo.tally(game_id)
        team1_votes = tally.get(game.team1, 0)
        team2_votes = tally.get(game.team2, 0)
        total = team1_votes + team2_votes
        team1_pct = round(team1_votes * 100 / total) if total else 0

        return {
            "gameId": game_id,
            "total": total,
            "team1": {"team": game.team1, "votes": team1_votes, "percentage": team1_pct},
            "team2": {"team": game.team2, "votes": team2_votes, "percentage": 100 - team1_pct if total else 0},
            "predictions": [serialize_prediction(p) for p in self.repo.find_by_game(game_id)],
        }

    def vote(self, user_id: str, game_id: str, voted_for: str) -> Prediction:
        game = self.games.find_by_id(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        if voted_for not in (game.team1, game.team2):
            raise ValidationError(f"{voted_for} is not playing in this game")
        if game.is_final:
            raise ValidationError("Predictions are closed for a final game")
        if self.repo.find_for_user(user_id, game_id):
            raise ValidationError("You can only make one prediction per game")

        try:
            prediction = self.repo.create(user_id=user_id, game_id=game_id, voted_for=voted_for)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError("You can only make one prediction per game")
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(prediction)
        logger.info(f"User {user_id} predicts {voted_for} in game {game_id}")
        return prediction
