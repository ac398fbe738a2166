"""
WebSocket relay at /ws.

Inbound messages:
    {"type": "chat", "username": ..., "message": ..., "gameId": ...}
    {"type": "ball_move", "gameId": ..., "ballPosition": 0-100}

Anything else is logged and ignored; the connection stays open.
"""
import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from app.core import metrics
from app.core.database import get_db
from app.core.exceptions import LeagueHubError
from app.services.league import ChatService, serialize_message
from app.services.live.broadcast import ConnectionManager, manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


async def handle_chat(data: Dict[str, Any], db: Session, connections: ConnectionManager) -> None:
    chat = ChatService(db).post(
        username=data.get("username"),
        message=data.get("message"),
        game_id=data.get("gameId"),
    )
    await connections.broadcast({
        "type": "chat",
        "message": serialize_message(chat),
        "gameId": chat.game_id,
    })


async def handle_ball_move(data: Dict[str, Any], sender: WebSocket, connections: ConnectionManager) -> None:
    game_id = data.get("gameId")
    position = data.get("ballPosition")
    if not game_id or isinstance(position, bool) or not isinstance(position, int) or not 0 <= position <= 100:
        logger.warning(f"Ignoring ball_move with gameId={game_id!r} ballPosition={position!r}")
        return
    await connections.broadcast(
        {"type": "game_update", "gameId": game_id, "game": {"id": game_id, "ballPosition": position}},
        exclude=sender,
    )


@router.websocket("/ws")
async def websocket_relay(websocket: WebSocket, db: Session = Depends(get_db)):
    await manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed WebSocket message")
                continue
            if not isinstance(data, dict):
                logger.warning("Ignoring non-object WebSocket message")
                continue

            message_type = data.get("type")
            label = message_type if message_type in ("chat", "ball_move") else "unknown"
            metrics.websocket_messages_total.labels(type=label, direction="in").inc()

            try:
                if message_type == "chat":
                    await handle_chat(data, db, manager)
                elif message_type == "ball_move":
                    await handle_ball_move(data, websocket, manager)
                else:
                    logger.warning(f"Ignoring WebSocket message of type {message_type!r}")
            except LeagueHubError as e:
                logger.warning(f"Rejected {message_type} message: {e.message}")
            except Exception as e:
                logger.error(f"Error handling {message_type} message: {e}")
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
