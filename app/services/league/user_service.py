"""
User accounts. Each user gets a random API key, shown once at creation or
rotation; admins manage roles and remove accounts.
"""
import secrets
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import UserNotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import User
from app.repositories import UserRepository

logger = get_logger(__name__)

ROLES = ("admin", "streamer", "user")


def generate_api_key() -> str:
    return secrets.token_hex(24)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository(db, default_coins=settings.DEFAULT_COINS)

    def serialize(self, user: User) -> dict:
        """Public view of an account; the API key is never included."""
        return {
            "id": user.id,
            "username": user.username,
            "role": user.role,
            "coins": self.repo.balance_of(user),
            "createdAt": user.created_at.isoformat() if user.created_at else None,
        }

    def list_users(self) -> List[User]:
        return self.repo.query().order_by(User.username).all()

    def get_user(self, user_id: str) -> User:
        user = self.repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def create_user(self, username: str, role: str = "user", coins: Optional[int] = None) -> Tuple[User, str]:
        """
        Create a user.

        Returns:
            (user, api_key)
        """
        username = (username or "").strip()
        if not username:
            raise ValidationError("username is required")
        _check_role(role)
        if coins is not None and coins < 0:
            raise ValidationError("coins cannot be negative")
        if self.repo.find_by_username(username):
            raise ValidationError(f"User {username} already exists")

        api_key = generate_api_key()
        try:
            user = self.repo.create(username=username, role=role, api_key=api_key, coins=coins)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        logger.info(f"Created {role} {username}")
        return user, api_key

    def rotate_api_key(self, username: str) -> str:
        user = self.repo.find_by_username(username)
        if user is None:
            raise UserNotFoundError(username)
        user.api_key = generate_api_key()
        self.db.commit()
        logger.info(f"Rotated API key of {username}")
        return user.api_key

    def set_role(self, user_id: str, role: str, acting_user: User) -> User:
        """Change a user's role. Admins cannot change their own."""
        _check_role(role)
        user = self.get_user(user_id)
        if user.id == acting_user.id:
            raise ValidationError("You cannot change your own role")

        previous = user.role
        user.role = role
        self.db.commit()
        logger.info(f"{acting_user.username} changed role of {user.username}: {previous} -> {role}")
        return user

    def delete_user(self, user_id: str, acting_user: User) -> None:
        """Remove an account with its bets and predictions. Admins cannot delete themselves."""
        user = self.get_user(user_id)
        if user.id == acting_user.id:
            raise ValidationError("You cannot delete yourself")

        try:
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info(f"{acting_user.username} deleted user {user.username}")


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise ValidationError(f"role must be one of {', '.join(ROLES)}")
