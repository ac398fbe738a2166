"""
Game schedule and scoring.

Every admin change to a game goes through update_game so that bet
settlement follows the is_final flag:

    not final -> final : pending bets are settled against the score
    final -> not final : settled bets are reopened and their credits reversed

Both the game change and the settlement commit together under the game's
lock. Connected clients get a game_update afterwards; broadcasting never
fails the request.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import GameNotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import Game, GamePlay
from app.repositories import GameRepository
from app.services.betting.game_locks import game_locks
from app.services.betting.settlement_service import SettlementResult, SettlementService
from app.services.live.broadcast import manager

logger = get_logger(__name__)

UPDATABLE_FIELDS = (
    "week", "season", "team1", "team2", "team1_score", "team2_score", "quarter",
    "game_time", "location", "is_final", "is_live", "stream_link", "last_play",
    "ball_position",
)


def serialize_game(game: Game) -> Dict[str, Any]:
    """camelCase view of a game, as sent to clients."""
    return {
        "id": game.id,
        "week": game.week,
        "season": game.season,
        "team1": game.team1,
        "team2": game.team2,
        "team1Score": game.team1_score,
        "team2Score": game.team2_score,
        "quarter": game.quarter,
        "gameTime": game.game_time.isoformat() if game.game_time else None,
        "location": game.location,
        "isFinal": game.is_final,
        "isLive": game.is_live,
        "streamLink": game.stream_link,
        "lastPlay": game.last_play,
        "ballPosition": game.ball_position,
    }


def serialize_play(play: GamePlay) -> Dict[str, Any]:
    return {
        "id": play.id,
        "gameId": play.game_id,
        "quarter": play.quarter,
        "playType": play.play_type,
        "team": play.team,
        "playerName": play.player_name,
        "description": play.description,
        "yardsGained": play.yards_gained,
        "pointsAdded": play.points_added,
        "createdAt": play.created_at.isoformat() if play.created_at else None,
    }


class GameService:
    """CRUD for games plus score-driven settlement."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = GameRepository(db)
        self.settlement = SettlementService(db)

    def list_games(self, season: Optional[int] = None, week: Optional[int] = None) -> List[Game]:
        return self.repo.find_by_season(season or settings.CURRENT_SEASON, week)

    def current_games(self, season: Optional[int] = None) -> List[Game]:
        """
        The games to feature right now: every live game if any is live,
        otherwise the earliest week that still has unfinished games,
        otherwise the last week of the season.
        """
        games = self.list_games(season=season)
        live = [g for g in games if g.is_live]
        if live:
            return live

        upcoming = [g for g in games if not g.is_final]
        if upcoming:
            week = min(g.week for g in upcoming)
            return [g for g in upcoming if g.week == week]

        if not games:
            return []
        last_week = max(g.week for g in games)
        return [g for g in games if g.week == last_week]

    def get_game(self, game_id: str) -> Game:
        game = self.repo.find_by_id(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def create_game(self, **fields) -> Game:
        if not fields.get("team1") or not fields.get("team2"):
            raise ValidationError("team1 and team2 are required")
        if fields["team1"] == fields["team2"]:
            raise ValidationError("A team cannot play itself")
        fields.setdefault("season", settings.CURRENT_SEASON)

        game = self.repo.create(**{k: v for k, v in fields.items() if k in UPDATABLE_FIELDS})
        _make_flags_exclusive(game, prefer_final=True)
        self.db.commit()
        self.db.refresh(game)
        logger.info(f"Created game {game.id}: {game.team1} vs {game.team2} (week {game.week})")
        return game

    def delete_game(self, game_id: str) -> None:
        """Delete a game and its plays. Its bets are voided first, so no coins are lost or kept."""
        with game_locks.hold(game_id):
            try:
                game = self.repo.find_for_update(game_id)
                if game is None:
                    raise GameNotFoundError(game_id)

                voided = self.settlement.void_bets(game)
                self.db.delete(game)
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
        game_locks.discard(game_id)
        logger.info(f"Deleted game {game_id} ({voided.voided} bets voided)")

    def update_game(self, game_id: str, fields: Dict[str, Any]) -> Game:
        """
        Apply a partial update and settle or reopen bets on an is_final change.

        Args:
            game_id: Game to change
            fields: snake_case column -> new value; unknown keys are ignored

        Returns:
            The refreshed game
        """
        with game_locks.hold(game_id):
            try:
                game = self.repo.find_for_update(game_id)
                if game is None:
                    raise GameNotFoundError(game_id)

                was_final = bool(game.is_final)
                changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
                self.repo.update(game, **changes)
                reopened_live = bool(changes.get("is_live")) and "is_final" not in changes
                _make_flags_exclusive(game, prefer_final=not reopened_live)

                settlement: Optional[SettlementResult] = None
                if game.is_final and not was_final:
                    settlement = self.settlement.resolve_bets(game)
                elif was_final and not game.is_final:
                    settlement = self.settlement.unresolve_bets(game)

                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(game)
        if settlement is not None:
            logger.info(f"Game {game_id} update triggered {settlement.action}", extra=settlement.to_dict())

        manager.schedule_game_update(game.id, serialize_game(game))
        return game

    # ========================================================================
    # Play-by-play
    # ========================================================================

    def list_plays(self, game_id: str) -> List[GamePlay]:
        self.get_game(game_id)
        return self.repo.find_plays(game_id)

    def add_play(self, game_id: str, **play_fields) -> GamePlay:
        """
        Record a play. Points scored by one of the game's teams are added to
        that team's score and pushed to clients.
        """
        with game_locks.hold(game_id):
            try:
                game = self.repo.find_for_update(game_id)
                if game is None:
                    raise GameNotFoundError(game_id)

                play = self.repo.add_play(game_id=game_id, **play_fields)
                points = play_fields.get("points_added") or 0
                scored = False
                if points > 0:
                    if play.team == game.team1:
                        game.team1_score = (game.team1_score or 0) + points
                        scored = True
                    elif play.team == game.team2:
                        game.team2_score = (game.team2_score or 0) + points
                        scored = True
                if play.description:
                    game.last_play = play.description

                self.db.commit()
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(play)
        self.db.refresh(game)
        if scored:
            logger.info(f"{play.team} +{points} in game {game_id} ({game.team1_score}-{game.team2_score})")
        manager.schedule_game_update(game.id, serialize_game(game))
        return play


def _make_flags_exclusive(game: Game, prefer_final: bool) -> None:
    # A game can't be live and final at once
    if game.is_live and game.is_final:
        if prefer_final:
            game.is_live = False
        else:
            game.is_final = False
