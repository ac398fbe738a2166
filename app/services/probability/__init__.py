"""
Win-probability model: standings ranking, strength of schedule, the
probability blend itself, and the odds it implies.
"""
from app.services.probability.standings_ranker import (
    calculate_rankings,
    get_rank,
    get_conference_rank,
    ordinal_rank_label,
    sort_standings,
)
from app.services.probability.schedule_strength import schedule_strength
from app.services.probability.odds import calculate_odds, odds_to_multiplier, payout_for
from app.services.probability.win_probability import (
    calculate_win_probability,
    get_win_probability_factors,
    WinProbabilityService,
)

__all__ = [
    "calculate_rankings",
    "get_rank",
    "get_conference_rank",
    "ordinal_rank_label",
    "sort_standings",
    "schedule_strength",
    "calculate_odds",
    "odds_to_multiplier",
    "payout_for",
    "calculate_win_probability",
    "get_win_probability_factors",
    "WinProbabilityService",
]
