"""
WebSocket relay tests: chat fan-out, ball_move relay, malformed input, and
game_update pushes from the REST game endpoints.
"""
import json

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketState

from app.models import ChatMessage
from app.services.live.broadcast import manager


class TestWebSocketRelay:

    def test_chat_is_censored_stored_and_broadcast(self, test_client: TestClient, db_session):
        with test_client.websocket_connect("/ws") as sender, test_client.websocket_connect("/ws") as listener:
            sender.send_json({"type": "chat", "username": "alice", "message": "damn what a catch"})

            for ws in (sender, listener):
                data = ws.receive_json()
                assert data["type"] == "chat"
                assert data["gameId"] is None
                assert data["message"]["message"] == "[CENSORED] what a catch"

        stored = db_session.query(ChatMessage).one()
        assert stored.username == "alice"

        history = test_client.get("/api/v1/chat").json()
        assert history[0]["message"] == "[CENSORED] what a catch"

    def test_ball_move_goes_to_everyone_but_sender(self, test_client: TestClient, scheduled_game):
        with test_client.websocket_connect("/ws") as sender, test_client.websocket_connect("/ws") as listener:
            sender.send_json({"type": "ball_move", "gameId": scheduled_game.id, "ballPosition": 35})

            update = listener.receive_json()
            assert update == {
                "type": "game_update",
                "gameId": scheduled_game.id,
                "game": {"id": scheduled_game.id, "ballPosition": 35},
            }

            # The sender's next message is its own chat, not the ball move
            sender.send_json({"type": "chat", "username": "alice", "message": "go"})
            assert sender.receive_json()["type"] == "chat"

    def test_malformed_messages_keep_connection_open(self, test_client: TestClient):
        with test_client.websocket_connect("/ws") as ws:
            ws.send_text("this is not json")
            ws.send_json(["not", "an", "object"])
            ws.send_json({"type": "mystery"})
            ws.send_json({"type": "ball_move", "gameId": "g1", "ballPosition": 250})
            ws.send_json({"type": "chat", "username": "", "message": ""})

            ws.send_json({"type": "chat", "username": "bob", "message": "still here", "gameId": "g1"})
            data = ws.receive_json()
            assert data["message"]["message"] == "still here"
            assert data["gameId"] == "g1"


class RecordingSocket:
    """Stands in for a connected client; keeps every frame sent to it."""

    def __init__(self):
        self.application_state = WebSocketState.CONNECTED
        self.client_state = WebSocketState.CONNECTED
        self.sent = []

    async def send_text(self, text: str) -> None:
        self.sent.append(json.loads(text))


@pytest.fixture
def subscriber():
    socket = RecordingSocket()
    manager.active_connections.append(socket)
    yield socket
    manager.disconnect(socket)


class TestGameUpdateBroadcast:

    @pytest.mark.asyncio
    async def test_patch_pushes_game_update(self, async_client, users, scheduled_game, subscriber):
        response = await async_client.patch(
            f"/api/v1/games/{scheduled_game.id}",
            json={"team1Score": 7, "quarter": "Q1", "isLive": True},
            headers={"X-API-Key": users["admin"].api_key},
        )
        assert response.status_code == 200

        await manager.drain()

        assert len(subscriber.sent) == 1
        update = subscriber.sent[0]
        assert update["type"] == "game_update"
        assert update["gameId"] == scheduled_game.id
        assert update["game"]["team1Score"] == 7
        assert update["game"]["isLive"] is True

    @pytest.mark.asyncio
    async def test_scoring_play_pushes_game_update(self, async_client, users, scheduled_game, subscriber):
        response = await async_client.post(
            f"/api/v1/games/{scheduled_game.id}/plays",
            json={"quarter": "Q2", "playType": "field_goal", "team": "Bears",
                  "description": "41 yd FG", "pointsAdded": 3},
            headers={"X-API-Key": users["admin"].api_key},
        )
        assert response.status_code == 201

        await manager.drain()

        assert [m["game"]["team2Score"] for m in subscriber.sent] == [3]
