"""
Strength of schedule: average win percentage of the opponents a team has
already played in final games.
"""
from typing import Sequence

from app.services.probability.standings_ranker import win_percentage

NEUTRAL_SOS = 0.5


def schedule_strength(team: str, games: Sequence, standings: Sequence) -> float:
    """
    Average opponent win percentage over the team's completed games.

    Opponents without a standing row, or without games played, count as
    neutral (0.5). A team with no completed games also gets 0.5.

    Returns:
        Value in [0, 1]
    """
    completed = [
        g for g in games
        if g.is_final and (g.team1 == team or g.team2 == team)
    ]
    if not completed:
        return NEUTRAL_SOS

    by_team = {s.team: s for s in standings}

    total = 0.0
    for game in completed:
        opponent = game.team2 if game.team1 == team else game.team1
        standing = by_team.get(opponent)
        if standing is None:
            total += NEUTRAL_SOS
        else:
            total += win_percentage(standing.wins, standing.losses, default=NEUTRAL_SOS)

    return total / len(completed)
