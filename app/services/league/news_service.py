"""
League news posts written by staff.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NewsNotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import NewsArticle, User
from app.repositories import NewsRepository

logger = get_logger(__name__)

MAX_TITLE_LENGTH = 300
EXCERPT_LENGTH = 200


def serialize_article(article: NewsArticle) -> dict:
    return {
        "id": article.id,
        "title": article.title,
        "content": article.content,
        "excerpt": article.excerpt,
        "authorId": article.author_id,
        "author": article.author.username if article.author else None,
        "createdAt": article.created_at.isoformat() if article.created_at else None,
        "updatedAt": article.updated_at.isoformat() if article.updated_at else None,
    }


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """First `length` characters of the post, cut at a word boundary."""
    text = " ".join(content.split())
    if len(text) <= length:
        return text
    cut = text[:length].rsplit(" ", 1)[0]
    return cut + "..."


class NewsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = NewsRepository(db)

    def list_articles(self, limit: int = 50) -> List[NewsArticle]:
        return self.repo.latest(limit)

    def get_article(self, article_id: str) -> NewsArticle:
        article = self.repo.find_by_id(article_id)
        if article is None:
            raise NewsNotFoundError(article_id)
        return article

    def publish(self, author: User, title: str, content: str, excerpt: Optional[str] = None) -> NewsArticle:
        """Store a post. Without an excerpt, one is cut from the content."""
        title = (title or "").strip()
        content = (content or "").strip()
        if not title or not content:
            raise ValidationError("title and content are required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title longer than {MAX_TITLE_LENGTH} characters")

        try:
            article = self.repo.create(
                title=title,
                content=content,
                excerpt=(excerpt or "").strip() or make_excerpt(content),
                author_id=author.id,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(article)
        logger.info(f"{author.username} published news {article.id}: {title}")
        return article

    def delete_article(self, article_id: str) -> None:
        if not self.repo.delete(article_id):
            raise NewsNotFoundError(article_id)
        self.db.commit()
        logger.info(f"Deleted news {article_id}")
