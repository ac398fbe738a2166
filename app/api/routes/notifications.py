"""
Live/final notification polling.

The client sends the snapshot it got from its previous call and receives the
games that went live or final since then, plus the snapshot to send next time.
"""
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.league import GameService
from app.services.live.notifications import GameState, diff_game_states

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


class GameStateModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_live: bool = Field(False, alias="isLive")
    is_final: bool = Field(False, alias="isFinal")


class NotificationDiffRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    previous: Dict[str, GameStateModel] = Field(default_factory=dict, description="gameId -> last seen state")
    season: Optional[int] = None
    week: Optional[int] = None
    notify_live: bool = Field(True, alias="notifyLive")
    notify_final: bool = Field(True, alias="notifyFinal")


@router.post("/diff")
async def notification_diff(request: NotificationDiffRequest, db: Session = Depends(get_db)):
    try:
        games = GameService(db).list_games(season=request.season, week=request.week)
        previous = {
            game_id: GameState(is_live=state.is_live, is_final=state.is_final)
            for game_id, state in request.previous.items()
        }
        events, snapshot = diff_game_states(
            games,
            previous,
            notify_live=request.notify_live,
            notify_final=request.notify_final,
        )
        return {
            "events": [e.to_dict() for e in events],
            "snapshot": {
                game_id: {"isLive": state.is_live, "isFinal": state.is_final}
                for game_id, state in snapshot.items()
            },
        }
    except Exception as e:
        logger.error(f"Error computing notification diff: {e}")
        raise HTTPException(status_code=500, detail=str(e))
