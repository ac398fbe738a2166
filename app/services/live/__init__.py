"""
Live services: WebSocket relay, chat profanity filter and notification
transition detection.
"""

from app.services.live.broadcast import ConnectionManager, manager
from app.services.live.notifications import GameState, GameNotification, diff_game_states, observe_state
from app.services.live.profanity_filter import censor_profanity

__all__ = [
    "ConnectionManager",
    "manager",
    "GameState",
    "GameNotification",
    "diff_game_states",
    "observe_state",
    "censor_profanity",
]
