"""
Repository layer for data access.

Usage:
    from app.repositories import GameRepository, BetRepository
    from app.core.database import SessionLocal

    db = SessionLocal()
    games = GameRepository(db).find_by_season(2)
    db.close()
"""

from app.repositories.base import BaseRepository
from app.repositories.game_repository import GameRepository
from app.repositories.bet_repository import BetRepository
from app.repositories.user_repository import UserRepository
from app.repositories.standing_repository import StandingRepository
from app.repositories.chat_repository import ChatRepository
from app.repositories.player_stats_repository import PlayerStatsRepository
from app.repositories.news_repository import NewsRepository
from app.repositories.prediction_repository import PredictionRepository

__all__ = [
    "BaseRepository",
    "GameRepository",
    "BetRepository",
    "UserRepository",
    "StandingRepository",
    "ChatRepository",
    "PlayerStatsRepository",
    "NewsRepository",
    "PredictionRepository",
]
