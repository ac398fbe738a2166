"""
Standings routes.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.api.errors import to_http_exception
from app.core.auth import require_admin
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.models import User
from app.services.league import StandingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/standings", tags=["standings"])


class StandingUpsert(BaseModel):
    """Create or overwrite the standing of (team, division, season)."""
    model_config = ConfigDict(populate_by_name=True)

    team: str
    division: str = Field(..., description="e.g. AFC_East; the conference is the part before '_'")
    season: Optional[int] = None
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    point_differential: int = Field(0, alias="pointDifferential")
    manual_order: Optional[int] = Field(None, alias="manualOrder", ge=1)


@router.get("")
async def list_standings(
    season: Optional[int] = Query(None, description="Season (defaults to the current season)"),
    db: Session = Depends(get_db)
):
    """Standings with overall and conference rank."""
    try:
        return StandingsService(db).ranked(season)
    except Exception as e:
        logger.error(f"Error listing standings: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("")
async def upsert_standing(
    request: StandingUpsert,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        standing = StandingsService(db).upsert_standing(**request.model_dump())
        return {
            "id": standing.id,
            "team": standing.team,
            "division": standing.division,
            "season": standing.season,
            "wins": standing.wins,
            "losses": standing.losses,
            "pointDifferential": standing.point_differential,
            "manualOrder": standing.manual_order,
        }
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error saving standing: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{standing_id}")
async def delete_standing(
    standing_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        StandingsService(db).delete_standing(standing_id)
        return {"message": f"Standing {standing_id} deleted"}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting standing {standing_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
