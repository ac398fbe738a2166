"""
Game schedule, scoring, play-by-play and win-probability routes.
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.api.errors import to_http_exception
from app.core.auth import require_admin
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.models import User
from app.services.league import GameService, serialize_game, serialize_play
from app.services.probability import WinProbabilityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/games", tags=["games"])


# Request models
class GameCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    week: int = Field(..., ge=1)
    season: Optional[int] = None
    team1: str
    team2: str
    game_time: Optional[datetime] = Field(None, alias="gameTime")
    location: Optional[str] = None
    stream_link: Optional[str] = Field(None, alias="streamLink")


class GameUpdate(BaseModel):
    """Partial update; only the fields sent are applied."""
    model_config = ConfigDict(populate_by_name=True)

    week: Optional[int] = Field(None, ge=1)
    season: Optional[int] = None
    team1: Optional[str] = None
    team2: Optional[str] = None
    team1_score: Optional[int] = Field(None, alias="team1Score", ge=0)
    team2_score: Optional[int] = Field(None, alias="team2Score", ge=0)
    quarter: Optional[str] = None
    game_time: Optional[datetime] = Field(None, alias="gameTime")
    location: Optional[str] = None
    is_final: Optional[bool] = Field(None, alias="isFinal")
    is_live: Optional[bool] = Field(None, alias="isLive")
    stream_link: Optional[str] = Field(None, alias="streamLink")
    last_play: Optional[str] = Field(None, alias="lastPlay")
    ball_position: Optional[int] = Field(None, alias="ballPosition", ge=0, le=100)


class PlayCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quarter: str
    play_type: str = Field(..., alias="playType")
    team: str
    player_name: Optional[str] = Field(None, alias="playerName")
    description: str
    yards_gained: int = Field(0, alias="yardsGained")
    points_added: int = Field(0, alias="pointsAdded", ge=0)


@router.get("", response_model=List[dict])
async def list_games(
    season: Optional[int] = Query(None, description="Season (defaults to the current season)"),
    week: Optional[int] = Query(None, ge=1, description="Filter by week"),
    db: Session = Depends(get_db)
):
    """List games of a season, ordered by week and kickoff."""
    try:
        games = GameService(db).list_games(season=season, week=week)
        return [serialize_game(g) for g in games]
    except Exception as e:
        logger.error(f"Error listing games: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/current")
async def current_games(
    season: Optional[int] = Query(None, description="Season (defaults to the current season)"),
    db: Session = Depends(get_db)
):
    """Live games if any, otherwise the next week with unfinished games, otherwise the last week."""
    try:
        return [serialize_game(g) for g in GameService(db).current_games(season=season)]
    except Exception as e:
        logger.error(f"Error listing current games: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{game_id}")
async def get_game(game_id: str, db: Session = Depends(get_db)):
    try:
        return serialize_game(GameService(db).get_game(game_id))
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error retrieving game {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", status_code=201)
async def create_game(
    request: GameCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        game = GameService(db).create_game(**request.model_dump(exclude_none=True))
        return serialize_game(game)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating game: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/{game_id}")
async def update_game(
    game_id: str,
    request: GameUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """
    Update a game. Setting isFinal settles its pending bets; clearing it
    reopens them and reverses the payouts.
    """
    try:
        game = GameService(db).update_game(game_id, request.model_dump(exclude_unset=True))
        return serialize_game(game)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating game {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{game_id}")
async def delete_game(
    game_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        GameService(db).delete_game(game_id)
        return {"message": f"Game {game_id} deleted"}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting game {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{game_id}/win-probability")
async def get_win_probability(game_id: str, db: Session = Depends(get_db)):
    """Both sides' win probability and odds, with the factor breakdown."""
    try:
        return WinProbabilityService(db).summarize(game_id)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error computing win probability for {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{game_id}/plays")
async def list_plays(game_id: str, db: Session = Depends(get_db)):
    try:
        return [serialize_play(p) for p in GameService(db).list_plays(game_id)]
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error listing plays for {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{game_id}/plays", status_code=201)
async def add_play(
    game_id: str,
    request: PlayCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Record a play; points are added to the scoring team."""
    try:
        play = GameService(db).add_play(game_id, **request.model_dump())
        return serialize_play(play)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error adding play to {game_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
