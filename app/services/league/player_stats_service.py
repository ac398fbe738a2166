"""
Weekly player stat lines, checked against the fields recorded for each
position before they are stored.
"""
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import StatLineNotFoundError
from app.core.logging import get_logger
from app.models import PlayerStats
from app.repositories import PlayerStatsRepository
from app.services.stats.stat_fields import ALL_STAT_FIELDS, parse_position, validate_stat_line

logger = get_logger(__name__)


def serialize_stat_line(line: PlayerStats) -> dict:
    data = {
        "id": line.id,
        "playerName": line.player_name,
        "team": line.team,
        "position": line.position,
        "week": line.week,
    }
    for name in ALL_STAT_FIELDS:
        data[name] = getattr(line, name)
    return data


class PlayerStatsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PlayerStatsRepository(db)

    def list_stats(
        self,
        team: Optional[str] = None,
        position: Optional[str] = None,
        week: Optional[int] = None,
    ) -> List[PlayerStats]:
        return self.repo.search(
            team=team,
            position=parse_position(position).value if position else None,
            week=week,
        )

    def record(self, player_name: str, team: str, position: str, week: int, stats: Dict[str, int]) -> PlayerStats:
        pos = parse_position(position)
        validate_stat_line(pos, stats)
        try:
            line = self.repo.create(
                player_name=player_name,
                team=team,
                position=pos.value,
                week=week,
                **{name: value or 0 for name, value in stats.items()},
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(line)
        logger.info(f"Recorded week {week} stats for {player_name} ({pos.value}, {team})")
        return line

    def delete(self, stat_id: str) -> None:
        if not self.repo.delete(stat_id):
            raise StatLineNotFoundError(stat_id)
        self.db.commit()
        logger.info(f"Deleted player stat line {stat_id}")
