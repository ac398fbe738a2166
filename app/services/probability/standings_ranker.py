"""
Standings ordering and rank lookups.

Ordering (best first):
1. If every row carries a manual_order, sort ascending by manual_order.
2. Otherwise sort by win percentage (0 for teams without games), descending.
3. Break win-percentage ties by point differential, descending.

Rank is the 1-based position in that order. A team missing from the
standings ranks last: total teams + 1.

Rows only need `team`, `wins`, `losses`, `point_differential`,
`manual_order` and (for conference ranks) `division` attributes, so ORM
rows and plain objects both work.
"""
from typing import Dict, List, Optional, Sequence

ORDINALS = [
    "1st", "2nd", "3rd", "4th", "5th", "6th", "7th", "8th",
    "9th", "10th", "11th", "12th", "13th", "14th", "15th", "16th",
]


def win_percentage(wins: Optional[int], losses: Optional[int], default: float = 0.0) -> float:
    """wins / games played, or `default` when no games have been played."""
    wins = wins or 0
    losses = losses or 0
    played = wins + losses
    if played == 0:
        return default
    return wins / played


def sort_standings(standings: Sequence) -> List:
    """Return standings rows best-first."""
    rows = list(standings)
    if rows and all(s.manual_order is not None for s in rows):
        return sorted(rows, key=lambda s: s.manual_order)

    return sorted(
        rows,
        key=lambda s: (win_percentage(s.wins, s.losses), s.point_differential or 0),
        reverse=True,
    )


def calculate_rankings(standings: Sequence) -> Dict[str, int]:
    """Map team name -> 1-based rank."""
    rankings: Dict[str, int] = {}
    for index, standing in enumerate(sort_standings(standings)):
        # Keep the best rank if a team shows up twice (e.g. moved divisions)
        rankings.setdefault(standing.team, index + 1)
    return rankings


def get_rank(team: str, standings: Sequence) -> int:
    """Rank of `team`; unranked teams get len(standings) + 1."""
    return calculate_rankings(standings).get(team, len(standings) + 1)


def conference_of(division: Optional[str]) -> str:
    """'AFC_D1' -> 'AFC'."""
    if not division:
        return ""
    return division.split("_", 1)[0]


def get_conference_rank(team: str, standings: Sequence) -> int:
    """
    Rank of `team` among teams of its own conference.

    Teams without a standing row rank after everyone in the full table.
    """
    standing = next((s for s in standings if s.team == team), None)
    if standing is None:
        return len(standings) + 1

    conference = conference_of(standing.division)
    peers = [s for s in standings if conference_of(s.division) == conference]
    return get_rank(team, peers)


def ordinal_rank_label(team: str, standings: Optional[Sequence]) -> str:
    """Display label such as '1st Overall', or 'N/A' when the team is unranked."""
    if not standings:
        return "N/A"
    if not any(s.team == team for s in standings):
        return "N/A"

    rank = get_rank(team, standings)
    ordinal = ORDINALS[rank - 1] if rank <= len(ORDINALS) else f"{rank}th"
    return f"{ordinal} Overall"
