"""
Win probability for a game side.

Blends four season factors into a pre-game probability, then, once a game
has started, pulls it toward a score-based estimate weighted by how late in
the game it is.

Pre-game impacts (team1 minus team2):
- ranking: rank score difference × 40, rank score = (N - rank + 1) / N
- point differential: clamp(PD diff, ±200) / 30 × 25
- record: win % difference × 50
- schedule strength: SOS difference × 20

Factor weights depend on how much data exists:

    both teams have played   ranking .40  record .35  pd .25  sos .30
    only one has played      ranking .50  record .40  pd .40
    neither has played       ranking .70              pd .50

Live blend:
    p = base × (1 - w) + (50 + score_impact) × w
where w comes from QUARTER_WEIGHTS and score_impact = score_diff / 7 × 10
(×1.3 in a blowout).

The result is an integer in [1, 99]; team2's value is always 100 - team1's.
"""
import math
from dataclasses import dataclass, asdict
from typing import Dict, Literal, Optional, Sequence

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import GameNotFoundError, ValidationError
from app.core.logging import get_logger
from app.models import Game, Standing
from app.services.probability.odds import calculate_odds
from app.services.probability.schedule_strength import schedule_strength
from app.services.probability.standings_ranker import calculate_rankings, win_percentage

logger = get_logger(__name__)

Side = Literal["team1", "team2"]

NEUTRAL_PROBABILITY = 50
MIN_PROBABILITY = 1
MAX_PROBABILITY = 99

PD_CAP = 200

WEIGHTS_FULL = {"ranking": 0.40, "record": 0.35, "pd": 0.25, "sos": 0.30}
WEIGHTS_ONE_PLAYED = {"ranking": 0.50, "record": 0.40, "pd": 0.40}
WEIGHTS_NONE_PLAYED = {"ranking": 0.70, "pd": 0.50}

QUARTER_WEIGHTS = {
    "1st": 0.25, "Q1": 0.25,
    "2nd": 0.45, "Q2": 0.45,
    "3rd": 0.70, "Q3": 0.70,
    "4th": 0.90, "Q4": 0.90,
    "OT": 0.95,
}
UNKNOWN_QUARTER_WEIGHT = 0.50

SCHEDULED = "Scheduled"
BLOWOUT_MARGIN = 21
BLOWOUT_MULTIPLIER = 1.3

# (margin above which the boost applies, boost, cap), checked in order
MARGIN_WEIGHT_BOOSTS = [
    (35, 0.20, 0.75),
    (28, 0.15, 0.65),
    (21, 0.10, 0.60),
]


@dataclass
class TeamAnalysis:
    """Season profile of one team as seen by the model."""
    ranking: int
    win_percentage: float
    point_differential: int
    schedule_strength: float
    total_games_played: int


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def analyze_team(
    team: str,
    standings: Sequence,
    games: Sequence,
    rankings: Optional[Dict[str, int]] = None,
) -> TeamAnalysis:
    """Build a team's profile; teams without a standing row rank last with a neutral record."""
    if rankings is None:
        rankings = calculate_rankings(standings)

    standing = next((s for s in standings if s.team == team), None)
    wins = (standing.wins or 0) if standing else 0
    losses = (standing.losses or 0) if standing else 0

    return TeamAnalysis(
        ranking=rankings.get(team, len(standings) + 1),
        win_percentage=win_percentage(wins, losses, default=0.5),
        point_differential=(standing.point_differential or 0) if standing else 0,
        schedule_strength=schedule_strength(team, games, standings),
        total_games_played=wins + losses,
    )


def base_probability(team1: TeamAnalysis, team2: TeamAnalysis, total_teams: int) -> float:
    """Pre-game probability for team1, before clamping."""
    rank_score1 = (total_teams - team1.ranking + 1) / total_teams
    rank_score2 = (total_teams - team2.ranking + 1) / total_teams

    pd_diff = max(-PD_CAP, min(PD_CAP, team1.point_differential - team2.point_differential))

    impacts = {
        "ranking": (rank_score1 - rank_score2) * 40,
        "pd": (pd_diff / 30) * 25,
        "record": (team1.win_percentage - team2.win_percentage) * 50,
        "sos": (team1.schedule_strength - team2.schedule_strength) * 20,
    }

    played1 = team1.total_games_played > 0
    played2 = team2.total_games_played > 0
    if played1 and played2:
        weights = WEIGHTS_FULL
    elif played1 or played2:
        weights = WEIGHTS_ONE_PLAYED
    else:
        weights = WEIGHTS_NONE_PLAYED

    return 50 + sum(impacts[factor] * weight for factor, weight in weights.items())


def quarter_weight(quarter: Optional[str], score_diff: int) -> float:
    """How much the live score counts, given the period and the margin."""
    weight = QUARTER_WEIGHTS.get(quarter or "", UNKNOWN_QUARTER_WEIGHT)

    margin = abs(score_diff)
    for threshold, boost, cap in MARGIN_WEIGHT_BOOSTS:
        if margin > threshold:
            return min(cap, weight + boost)
    return weight


def live_adjustment(probability: float, game) -> float:
    """Blend a pre-game probability with the current score. Scheduled games pass through."""
    quarter = game.quarter or SCHEDULED
    if quarter == SCHEDULED:
        return probability

    score_diff = (game.team1_score or 0) - (game.team2_score or 0)
    weight = quarter_weight(quarter, score_diff)

    score_impact = (score_diff / 7) * 10
    if abs(score_diff) > BLOWOUT_MARGIN:
        score_impact *= BLOWOUT_MULTIPLIER

    return probability * (1 - weight) + (50 + score_impact) * weight


def calculate_win_probability(
    game,
    side: Side,
    standings: Optional[Sequence] = None,
    all_games: Optional[Sequence] = None,
) -> int:
    """
    Win probability (percent) for one side of a game.

    Args:
        game: Object with team1/team2, team1_score/team2_score and quarter
        side: "team1" or "team2"
        standings: Standing rows for the season
        all_games: Season games, used for strength of schedule

    Returns:
        Integer in [1, 99]. Without standings the answer is 50.
    """
    if side not in ("team1", "team2"):
        raise ValidationError(f"side must be 'team1' or 'team2', got {side!r}")

    if not standings:
        return NEUTRAL_PROBABILITY

    games = all_games or []
    rankings = calculate_rankings(standings)
    team1 = analyze_team(game.team1, standings, games, rankings)
    team2 = analyze_team(game.team2, standings, games, rankings)

    probability = base_probability(team1, team2, len(standings))
    probability = live_adjustment(probability, game)

    clamped = max(MIN_PROBABILITY, min(MAX_PROBABILITY, _round_half_up(probability)))
    return clamped if side == "team1" else 100 - clamped


def _advantage(team1_name: str, team2_name: str, value1: float, value2: float) -> str:
    if value1 > value2:
        return team1_name
    if value2 > value1:
        return team2_name
    return "Even"


def get_win_probability_factors(
    game,
    standings: Optional[Sequence] = None,
    all_games: Optional[Sequence] = None,
) -> Optional[dict]:
    """
    Per-factor comparison of the two teams, for display next to the probability.

    Returns None when there are no standings to compare.
    """
    if not standings:
        return None

    games = all_games or []
    rankings = calculate_rankings(standings)
    team1 = analyze_team(game.team1, standings, games, rankings)
    team2 = analyze_team(game.team2, standings, games, rankings)

    standing1 = next((s for s in standings if s.team == game.team1), None)
    standing2 = next((s for s in standings if s.team == game.team2), None)

    def record(standing) -> str:
        if standing is None:
            return "0-0"
        return f"{standing.wins or 0}-{standing.losses or 0}"

    return {
        "team1": asdict(team1),
        "team2": asdict(team2),
        "factors": {
            "record": {
                "team1Record": record(standing1),
                "team2Record": record(standing2),
                "advantage": _advantage(game.team1, game.team2, team1.win_percentage, team2.win_percentage),
            },
            "pointDiff": {
                "team1PD": team1.point_differential,
                "team2PD": team2.point_differential,
                "advantage": _advantage(game.team1, game.team2, team1.point_differential, team2.point_differential),
            },
            "schedule": {
                "team1SOS": _round_half_up(team1.schedule_strength * 100),
                "team2SOS": _round_half_up(team2.schedule_strength * 100),
                "advantage": _advantage(game.team1, game.team2, team1.schedule_strength, team2.schedule_strength),
            },
        },
    }


class WinProbabilityService:
    """Loads a game's season context from the database and runs the model on it."""

    def __init__(self, db: Session):
        self.db = db

    def _season_context(self, season: int):
        standings = self.db.query(Standing).filter(Standing.season == season).all()
        games = self.db.query(Game).filter(Game.season == season).all()
        return standings, games

    def get_game(self, game_id: str) -> Game:
        game = self.db.query(Game).filter(Game.id == game_id).first()
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def probability_for(self, game: Game, side: Side) -> int:
        standings, games = self._season_context(game.season or settings.CURRENT_SEASON)
        return calculate_win_probability(game, side, standings, games)

    def odds_for(self, game: Game, picked_team: str) -> float:
        """Current decimal odds for a bet on `picked_team`."""
        side: Side = "team1" if picked_team == game.team1 else "team2"
        return calculate_odds(self.probability_for(game, side))

    def summarize(self, game_id: str) -> dict:
        """Both sides' probability and odds plus the factor breakdown."""
        game = self.get_game(game_id)
        standings, games = self._season_context(game.season or settings.CURRENT_SEASON)

        team1_probability = calculate_win_probability(game, "team1", standings, games)
        team2_probability = 100 - team1_probability

        logger.debug(
            f"Win probability {game.team1} {team1_probability}% vs {game.team2} {team2_probability}%",
            extra={"game_id": game.id},
        )

        return {
            "gameId": game.id,
            "team1": {
                "team": game.team1,
                "probability": team1_probability,
                "odds": calculate_odds(team1_probability),
            },
            "team2": {
                "team": game.team2,
                "probability": team2_probability,
                "odds": calculate_odds(team2_probability),
            },
            "analysis": get_win_probability_factors(game, standings, games),
        }
