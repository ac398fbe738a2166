"""
Standings repository.
"""
from typing import Optional, List

from app.models import Standing
from app.repositories.base import BaseRepository


class StandingRepository(BaseRepository[Standing]):
    """Repository for season standings rows."""

    def __init__(self, db):
        super().__init__(Standing, db)

    def find_by_season(self, season: int) -> List[Standing]:
        return (
            self.db.query(Standing)
            .filter(Standing.season == season)
            .order_by(Standing.division, Standing.team)
            .all()
        )

    def find_by_key(self, team: str, division: str, season: int) -> Optional[Standing]:
        """The row identified by (team, division, season), if any."""
        return self.where_first(
            Standing.team == team,
            Standing.division == division,
            Standing.season == season,
        )
