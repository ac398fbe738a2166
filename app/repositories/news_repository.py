"""
News article repository.
"""
from typing import List

from app.models import NewsArticle
from app.repositories.base import BaseRepository


class NewsRepository(BaseRepository[NewsArticle]):
    """Repository for league news posts."""

    def __init__(self, db):
        super().__init__(NewsArticle, db)

    def latest(self, limit: int = 50) -> List[NewsArticle]:
        """Newest first."""
        return (
            self.query()
            .order_by(NewsArticle.created_at.desc())
            .limit(limit)
            .all()
        )
