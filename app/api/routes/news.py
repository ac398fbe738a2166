"""
League news routes. Anyone can read; admins and streamers post.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.api.errors import to_http_exception
from app.core.auth import require_staff
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.models import User
from app.services.league import NewsService, serialize_article

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["news"])


class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None


@router.get("")
async def list_news(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db)
):
    """Newest posts first."""
    try:
        return [serialize_article(a) for a in NewsService(db).list_articles(limit)]
    except Exception as e:
        logger.error(f"Error listing news: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{article_id}")
async def get_news(article_id: str, db: Session = Depends(get_db)):
    try:
        return serialize_article(NewsService(db).get_article(article_id))
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error retrieving news {article_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", status_code=201)
async def publish_news(
    request: ArticleCreate,
    db: Session = Depends(get_db),
    author: User = Depends(require_staff)
):
    try:
        article = NewsService(db).publish(author, request.title, request.content, request.excerpt)
        return serialize_article(article)
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error publishing news: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{article_id}")
async def delete_news(
    article_id: str,
    db: Session = Depends(get_db),
    staff: User = Depends(require_staff)
):
    try:
        NewsService(db).delete_article(article_id)
        return {"success": True}
    except LeagueHubError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting news {article_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
