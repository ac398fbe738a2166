"""
League services: games and play-by-play, standings, chat history,
player stat lines, news, fan predictions and user accounts.
"""

from app.services.league.game_service import GameService, serialize_game, serialize_play
from app.services.league.standings_service import StandingsService
from app.services.league.chat_service import ChatService, serialize_message
from app.services.league.player_stats_service import PlayerStatsService, serialize_stat_line
from app.services.league.news_service import NewsService, serialize_article
from app.services.league.prediction_service import PredictionService, serialize_prediction
from app.services.league.user_service import UserService

__all__ = [
    "GameService",
    "serialize_game",
    "serialize_play",
    "StandingsService",
    "ChatService",
    "serialize_message",
    "PlayerStatsService",
    "serialize_stat_line",
    "NewsService",
    "serialize_article",
    "PredictionService",
    "serialize_prediction",
    "UserService",
]
