"""
Fan prediction routes: who-wins votes on a game.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.api.errors import to_http_exception
from app.core.auth import get_current_user
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.models import User
from app.services.league import PredictionService, serialize_prediction

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/predictions", tags=["predictions"])


class PredictionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(..., alias="gameId")
    voted_for: str = Field(..., alias="votedFor", min_length=1)


@router.get("/{game_id}")
async def get_predictions(game_id: str, db: Session = Depends(get_db)):
    """Votes on a game and the split between its teams."""
    try:
        return PredictionService(db).summary(game_id)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error retrieving predictions for {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", status_code=201)
async def make_prediction(
    request: PredictionCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """One vote per user per game."""
    try:
        prediction = PredictionService(db).vote(user.id, request.game_id, request.voted_for)
        return serialize_prediction(prediction)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error recording prediction: {e}")
        raise HTTPException(status_code=500, detail=str(e))
