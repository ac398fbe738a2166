"""
Database models.

Usage:
    from app.models import Game, Bet, Standing
"""
from app.models.models import (
    Base,
    User,
    Team,
    Standing,
    Game,
    Bet,
    ChatMessage,
    GamePlay,
    NewsArticle,
    Prediction,
    PlayerStats,
)

__all__ = [
    "Base",
    "User",
    "Team",
    "Standing",
    "Game",
    "Bet",
    "ChatMessage",
    "GamePlay",
    "NewsArticle",
    "Prediction",
    "PlayerStats",
]
