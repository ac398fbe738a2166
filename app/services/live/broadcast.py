"""
WebSocket fan-out for chat, score updates and ball position.

Message types (JSON, discriminated by "type"):
- chat: {username, message, gameId?} from a client; censored, stored, and
  sent to every client as {type: "chat", message: {...}, gameId}
- ball_move: {gameId, ballPosition} from a client; relayed at once to every
  other client as a partial game_update, never stored
- game_update: {gameId, game} pushed by the REST game endpoints after a
  change is committed

Delivery is best-effort: a send that fails drops that socket and nothing is
replayed. Reconnecting clients re-fetch state over REST.
"""
import asyncio
import json
from typing import Any, Dict, List, Optional, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from app.core import metrics
from app.core.logging import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """Tracks connected WebSocket clients and broadcasts to them."""

    def __init__(self):
        self.active_connections: List[WebSocket] = []
        # Strong references to scheduled broadcasts until they finish
        self._pending: Set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)

    async def connect(self, websocket: WebSocket) -> None:
        # Registered before the handshake completes so no broadcast is missed
        self.active_connections.append(websocket)
        try:
            await websocket.accept()
        except Exception:
            self.disconnect(websocket)
            raise
        metrics.websocket_connections.set(self.connection_count)
        logger.info(f"WebSocket connected ({self.connection_count} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            metrics.websocket_connections.set(self.connection_count)
            logger.info(f"WebSocket closed ({self.connection_count} open)")

    async def broadcast(self, payload: Dict[str, Any], exclude: Optional[WebSocket] = None) -> int:
        """
        Send `payload` to every open connection except `exclude`.

        Returns:
            Number of clients the message was handed to
        """
        text = json.dumps(payload, default=str)
        delivered = 0
        for connection in list(self.active_connections):
            if connection is exclude:
                continue
            if connection.application_state == WebSocketState.CONNECTING:
                continue
            if (
                connection.application_state != WebSocketState.CONNECTED
                or connection.client_state != WebSocketState.CONNECTED
            ):
                self.disconnect(connection)
                continue
            try:
                await connection.send_text(text)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping WebSocket after failed send: {e}")
                self.disconnect(connection)

        metrics.websocket_messages_total.labels(type=payload.get("type", "unknown"), direction="out").inc()
        return delivered

    async def broadcast_game_update(self, game_id: str, game: Dict[str, Any]) -> int:
        return await self.broadcast({"type": "game_update", "gameId": game_id, "game": game})

    def schedule_game_update(self, game_id: str, game: Dict[str, Any]) -> None:
        """
        Fire-and-forget game_update from request handlers.

        Failures are logged; they never reach the request that changed the game.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop; game_update for {game_id} not broadcast")
            return

        task = loop.create_task(self.broadcast_game_update(game_id, game))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(_log_broadcast_failure)

    async def drain(self) -> None:
        """Wait for scheduled broadcasts that are still in flight."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def _log_broadcast_failure(task: "asyncio.Task") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"game_update broadcast failed: {exc}")


manager = ConnectionManager()
