"""
Chat history. New messages arrive over the /ws relay.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.services.league import ChatService, serialize_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("")
async def get_chat(
    game_id: Optional[str] = Query(None, alias="gameId", description="Game room; omit for the site-wide room"),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """Latest messages of a room in chronological order."""
    try:
        return [serialize_message(m) for m in ChatService(db).recent(game_id=game_id, limit=limit)]
    except Exception as e:
        logger.error(f"Error retrieving chat: {e}")
        raise HTTPException(status_code=500, detail=str(e))
