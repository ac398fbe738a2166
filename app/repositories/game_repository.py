"""
Game repository.

Usage:
    repo = GameRepository(db)
    games = repo.find_by_season(2, week=3)
"""
from typing import Optional, List

from app.models import Game, GamePlay
from app.repositories.base import BaseRepository


class GameRepository(BaseRepository[Game]):
    """Repository for games and their play-by-play."""

    def __init__(self, db):
        super().__init__(Game, db)

    def find_by_season(self, season: int, week: Optional[int] = None) -> List[Game]:
        """Games of a season ordered by week then kickoff time."""
        query = self.db.query(Game).filter(Game.season == season)
        if week is not None:
            query = query.filter(Game.week == week)
        return query.order_by(Game.week, Game.game_time).all()

    def find_for_update(self, game_id: str) -> Optional[Game]:
        """Load a game with a row lock (no-op on SQLite) and fresh attributes."""
        return (
            self.db.query(Game)
            .filter(Game.id == game_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def find_plays(self, game_id: str) -> List[GamePlay]:
        return (
            self.db.query(GamePlay)
            .filter(GamePlay.game_id == game_id)
            .order_by(GamePlay.created_at)
            .all()
        )

    def add_play(self, **kwargs) -> GamePlay:
        play = GamePlay(**kwargs)
        self.db.add(play)
        return play
