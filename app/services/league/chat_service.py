"""
Chat history: censored on the way in, read back in chronological order.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.models import ChatMessage
from app.repositories import ChatRepository
from app.services.live.profanity_filter import censor_profanity

logger = get_logger(__name__)

MAX_MESSAGE_LENGTH = 500


def serialize_message(message: ChatMessage) -> dict:
    return {
        "id": message.id,
        "username": message.username,
        "message": message.message,
        "gameId": message.game_id,
        "createdAt": message.created_at.isoformat() if message.created_at else None,
    }


class ChatService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ChatRepository(db)

    def recent(self, game_id: Optional[str] = None, limit: int = 100) -> List[ChatMessage]:
        return self.repo.recent(game_id=game_id, limit=limit)

    def post(self, username: str, message: str, game_id: Optional[str] = None) -> ChatMessage:
        username = (username or "").strip()
        message = (message or "").strip()
        if not username or not message:
            raise ValidationError("username and message are required")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ValidationError(f"Message longer than {MAX_MESSAGE_LENGTH} characters")

        try:
            chat = self.repo.create(
                username=censor_profanity(username)[:50],
                message=censor_profanity(message),
                game_id=game_id or None,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(chat)
        return chat
