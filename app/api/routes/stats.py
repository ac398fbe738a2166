"""
Player stat routes: per-position field lists and weekly stat lines.
"""
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.api.errors import to_http_exception
from app.core.auth import require_admin
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.models import User
from app.services.league import PlayerStatsService, serialize_stat_line
from app.services.stats import parse_position, stat_fields_for

logger = logging.getLogger(__name__)

router = APIRouter(tags=["stats"])


class StatLineCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_name: str = Field(..., alias="playerName")
    team: str
    position: str
    week: int = Field(..., ge=1)
    stats: Dict[str, int] = Field(default_factory=dict, description="snake_case stat field -> value")


@router.get("/stats/fields/{position}")
async def get_stat_fields(position: str):
    """Stat fields recorded for a position."""
    try:
        pos = parse_position(position)
        return {"position": pos.value, "fields": stat_fields_for(pos)}
    except LeagueHubError as e:
        raise to_http_exception(e)


@router.get("/player-stats")
async def list_player_stats(
    team: Optional[str] = Query(None),
    position: Optional[str] = Query(None),
    week: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db)
):
    try:
        lines = PlayerStatsService(db).list_stats(team=team, position=position, week=week)
        return [serialize_stat_line(line) for line in lines]
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error listing player stats: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/player-stats", status_code=201)
async def record_player_stats(
    request: StatLineCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Store a stat line. Non-zero values in fields the position does not record are rejected."""
    try:
        line = PlayerStatsService(db).record(
            player_name=request.player_name,
            team=request.team,
            position=request.position,
            week=request.week,
            stats=request.stats,
        )
        return serialize_stat_line(line)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error recording player stats: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/player-stats/{stat_id}")
async def delete_player_stats(
    stat_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        PlayerStatsService(db).delete(stat_id)
        return {"success": True}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting player stats {stat_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
