"""
Chat message repository.
"""
from typing import Optional, List

from app.models import ChatMessage
from app.repositories.base import BaseRepository


class ChatRepository(BaseRepository[ChatMessage]):
    """Repository for chat history."""

    def __init__(self, db):
        super().__init__(ChatMessage, db)

    def recent(self, game_id: Optional[str] = None, limit: int = 100) -> List[ChatMessage]:
        """Latest `limit` messages in chronological order; game_id=None is the site-wide room."""
        query = self.db.query(ChatMessage)
        if game_id:
            query = query.filter(ChatMessage.game_id == game_id)
        else:
            query = query.filter(ChatMessage.game_id.is_(None))
        latest = query.order_by(ChatMessage.created_at.desc()).limit(limit).all()
        return list(reversed(latest))
