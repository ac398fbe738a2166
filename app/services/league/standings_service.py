"""
Standings maintenance. Rows are keyed by (team, division, season); saving a
row for an existing key overwrites it.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import StandingNotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import Standing, Team
from app.repositories import StandingRepository
from app.services.probability.standings_ranker import (
    calculate_rankings,
    get_conference_rank,
    ordinal_rank_label,
    win_percentage,
)

logger = get_logger(__name__)


class StandingsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = StandingRepository(db)

    def list_standings(self, season: Optional[int] = None) -> List[Standing]:
        return self.repo.find_by_season(season or settings.CURRENT_SEASON)

    def upsert_standing(
        self,
        team: str,
        division: str,
        season: Optional[int] = None,
        wins: int = 0,
        losses: int = 0,
        point_differential: int = 0,
        manual_order: Optional[int] = None,
    ) -> Standing:
        """Create the row for (team, division, season) or overwrite its record."""
        if not team or not division:
            raise ValidationError("team and division are required")
        if wins < 0 or losses < 0:
            raise ValidationError("wins and losses cannot be negative")
        season = season or settings.CURRENT_SEASON

        try:
            standing = self.repo.find_by_key(team, division, season)
            self._register_team(team, division)
            if standing is None:
                standing = self.repo.create(team=team, division=division, season=season)
                action = "Created"
            else:
                action = "Updated"
            self.repo.update(
                standing,
                wins=wins,
                losses=losses,
                point_differential=point_differential,
                manual_order=manual_order,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(standing)
        logger.info(f"{action} standing {team} ({division}, season {season}): {wins}-{losses}")
        return standing

    def _register_team(self, name: str, division: str) -> None:
        # Teams are known by name; the first standing for a new name registers it
        if self.db.query(Team).filter(Team.name == name).first() is None:
            self.db.add(Team(name=name, division=division))

    def delete_standing(self, standing_id: str) -> None:
        if not self.repo.delete(standing_id):
            raise StandingNotFoundError(standing_id)
        self.db.commit()
        logger.info(f"Deleted standing {standing_id}")

    def ranked(self, season: Optional[int] = None) -> List[dict]:
        """Standings rows with overall rank, conference rank and label."""
        standings = self.list_standings(season)
        ranks = calculate_rankings(standings)
        rows = []
        for s in standings:
            rows.append({
                "id": s.id,
                "team": s.team,
                "division": s.division,
                "season": s.season,
                "wins": s.wins,
                "losses": s.losses,
                "pointDifferential": s.point_differential,
                "manualOrder": s.manual_order,
                "winPercentage": round(win_percentage(s.wins, s.losses), 3),
                "rank": ranks.get(s.team),
                "conferenceRank": get_conference_rank(s.team, standings),
                "rankLabel": ordinal_rank_label(s.team, standings),
            })
        rows.sort(key=lambda r: r["rank"] or len(rows) + 1)
        return rows
