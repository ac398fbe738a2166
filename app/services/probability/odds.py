"""
Probability -> decimal payout multiplier.

    odds = clamp(round(100 / p, 2), 1.10, 10.00)

A 50% side pays 2.00x; heavy favourites bottom out at 1.10x and long shots
are capped at 10.00x.
"""
import math

MIN_ODDS = 1.10
MAX_ODDS = 10.00


def calculate_odds(probability: float) -> float:
    """
    Decimal odds for a win probability given in percent.

    Non-increasing in `probability`; always within [MIN_ODDS, MAX_ODDS].
    """
    raw = 100 / max(probability, 1)
    rounded = math.floor(raw * 100 + 0.5) / 100
    return max(MIN_ODDS, min(MAX_ODDS, rounded))


def odds_to_multiplier(odds: float) -> int:
    """Decimal odds -> stored integer multiplier (2.0 -> 200)."""
    return int(math.floor(odds * 100 + 0.5))


def payout_for(amount: int, multiplier: int) -> int:
    """Coins returned for a winning bet: floor(amount × multiplier / 100)."""
    return (amount * multiplier) // 100
