"""
Wager routes: place a bet, list your bets, read your balance.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session
from starlette.requests import Request

from app.api.errors import to_http_exception
from app.core.auth import get_current_user
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.core.rate_limit import limiter
from app.models import Bet, User
from app.services.betting import BetLedger

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bets"])


class PlaceBetRequest(BaseModel):
    """Request to place a wager on one side of a game."""
    model_config = ConfigDict(populate_by_name=True)

    game_id: str = Field(..., alias="gameId")
    picked_team: str = Field(..., alias="pickedTeam", description="team1 or team2 of the game, by name")
    amount: int = Field(..., gt=0, description="Stake in coins")
    odds: Optional[float] = Field(None, description="Decimal odds shown to the user (1.10-10.00)")


def serialize_bet(bet: Bet) -> dict:
    return {
        "id": bet.id,
        "userId": bet.user_id,
        "gameId": bet.game_id,
        "amount": bet.amount,
        "pickedTeam": bet.picked_team,
        "multiplier": bet.multiplier,
        "odds": bet.multiplier / 100,
        "won": bet.won,
        "status": bet.status,
        "createdAt": bet.created_at.isoformat() if bet.created_at else None,
    }


@router.post("/bets", status_code=201)
@limiter.limit("30/minute")
async def place_bet(
    request: Request,
    body: PlaceBetRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """
    Place a bet. The stake is debited now and the odds are locked in.
    """
    try:
        ledger = BetLedger(db)
        bet = ledger.place_bet(
            user_id=user.id,
            game_id=body.game_id,
            picked_team=body.picked_team,
            amount=body.amount,
            odds=body.odds,
        )
        return {
            "bet": serialize_bet(bet),
            "balance": ledger.get_balance(user.id),
        }
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error placing bet: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/bets")
async def get_my_bets(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    """The caller's bets, newest first."""
    try:
        bets = BetLedger(db).get_user_bets(user.id)
        return {
            "bets": [serialize_bet(b) for b in bets],
            "count": len(bets),
        }
    except Exception as e:
        logger.error(f"Error retrieving bets: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/balance")
async def get_balance(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
):
    try:
        return {"userId": user.id, "coins": BetLedger(db).get_balance(user.id)}
    except Exception as e:
        logger.error(f"Error retrieving balance: {e}")
        raise HTTPException(status_code=500, detail=str(e))
