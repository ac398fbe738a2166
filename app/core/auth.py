"""
API authentication dependencies.

Every user carries a personal API key, sent in the X-API-Key header. Routes
depend on get_current_user (any user), require_staff (admin or streamer)
or require_admin (role "admin").
"""
from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session
from starlette.requests import Request

from app.core.database import get_db
from app.core.logging import get_logger
from app.models import User
from app.repositories import UserRepository

logger = get_logger(__name__)

# API Key header name
API_KEY_NAME = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)

ADMIN_ROLE = "admin"
STAFF_ROLES = (ADMIN_ROLE, "streamer")


def get_current_user(
    request: Request,
    api_key: Optional[str] = Security(api_key_header),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the calling user from the X-API-Key header.

    Raises:
        HTTPException: 401 if the key is missing, 403 if it matches no user
    """
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="API key missing. Provide X-API-Key header."
        )

    user = UserRepository(db).find_by_api_key(api_key)
    if user is None:
        logger.warning(f"Invalid API key attempt from {request.client.host if request.client else 'unknown'}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid API key."
        )
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != ADMIN_ROLE:
        logger.warning(f"User {user.username} attempted an admin action")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required."
        )
    return user


def require_staff(user: User = Depends(get_current_user)) -> User:
    """Admins and streamers: the accounts that post league content."""
    if user.role not in STAFF_ROLES:
        logger.warning(f"User {user.username} attempted a staff action")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff access required."
        )
    return user
