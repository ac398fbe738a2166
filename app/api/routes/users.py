"""
Coin leaderboard, admin balance management and admin account management.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from app.api.errors import to_http_exception
from app.core.auth import require_admin
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.models import User
from app.services.betting import BetLedger
from app.services.league import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


class CoinAdjustment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    amount: int = Field(..., gt=0)


class CoinBalance(BaseModel):
    coins: int = Field(..., ge=0)


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    role: str = "user"
    coins: Optional[int] = Field(None, ge=0)


class RoleChange(BaseModel):
    role: str


@router.get("/leaderboard")
async def leaderboard(
    limit: int = Query(settings.LEADERBOARD_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Richest users first."""
    try:
        ledger = BetLedger(db)
        return [
            {
                "rank": position,
                "userId": user.id,
                "username": user.username,
                "coins": ledger.users.balance_of(user),
            }
            for position, user in enumerate(ledger.leaderboard(limit), start=1)
        ]
    except Exception as e:
        logger.error(f"Error building leaderboard: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/admin/add-coins")
async def add_coins(
    request: CoinAdjustment,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        balance = BetLedger(db).adjust_balance(request.user_id, request.amount)
        logger.info(f"Admin {admin.username} added {request.amount} coins to {request.user_id}")
        return {"userId": request.user_id, "coins": balance}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error adding coins: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/admin/remove-coins")
async def remove_coins(
    request: CoinAdjustment,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Remove coins; the balance stops at zero."""
    try:
        balance = BetLedger(db).adjust_balance(request.user_id, -request.amount)
        logger.info(f"Admin {admin.username} removed {request.amount} coins from {request.user_id}")
        return {"userId": request.user_id, "coins": balance}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error removing coins: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/users/{user_id}/coins")
async def set_coins(
    user_id: str,
    request: CoinBalance,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        balance = BetLedger(db).set_balance(user_id, request.coins)
        return {"userId": user_id, "coins": balance}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error setting coins for {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/users")
async def list_users(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        service = UserService(db)
        return [service.serialize(u) for u in service.list_users()]
    except Exception as e:
        logger.error(f"Error listing users: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/users", status_code=201)
async def create_user(
    request: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    """Create an account. The API key is returned here and never again."""
    try:
        service = UserService(db)
        user, api_key = service.create_user(request.username, role=request.role, coins=request.coins)
        logger.info(f"Admin {admin.username} created user {user.username}")
        return {**service.serialize(user), "apiKey": api_key}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating user: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.patch("/users/{user_id}/role")
async def change_role(
    user_id: str,
    request: RoleChange,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        service = UserService(db)
        return service.serialize(service.set_role(user_id, request.role, acting_user=admin))
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error changing role of {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin)
):
    try:
        UserService(db).delete_user(user_id, acting_user=admin)
        return {"success": True}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
