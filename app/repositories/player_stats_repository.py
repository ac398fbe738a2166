"""
Player stat line repository.
"""
from typing import Optional, List

from app.models import PlayerStats
from app.repositories.base import BaseRepository


class PlayerStatsRepository(BaseRepository[PlayerStats]):
    def __init__(self, db):
        super().__init__(PlayerStats, db)

    def search(
        self,
        team: Optional[str] = None,
        position: Optional[str] = None,
        week: Optional[int] = None,
    ) -> List[PlayerStats]:
        query = self.query()
        if team:
            query = query.filter(PlayerStats.team == team)
        if position:
            query = query.filter(PlayerStats.position == position)
        if week is not None:
            query = query.filter(PlayerStats.week == week)
        return query.order_by(PlayerStats.week, PlayerStats.player_name).all()
