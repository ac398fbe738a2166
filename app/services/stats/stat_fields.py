"""
Which stat columns are recorded for each position.

A stat line may only carry non-zero values in the fields of its player's
position; everything else stays 0.
"""
from enum import Enum
from typing import Dict, List, Mapping, Tuple

from app.core.exceptions import ValidationError


class Position(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OL = "OL"
    DE = "DE"
    LB = "LB"
    DB = "DB"
    S = "S"
    K = "K"


PASSING = ("passing_yards", "passing_touchdowns", "interceptions", "completions", "attempts", "sacks")
RUSHING = ("rushing_yards", "rushing_touchdowns", "rushing_attempts", "missed_tackles_forced")
RECEIVING = ("receiving_yards", "receiving_touchdowns", "receptions", "targets", "yards_after_catch")
COVERAGE = (
    "defensive_interceptions", "passes_defended", "completions_allowed",
    "targets_allowed", "swats", "defensive_touchdowns",
)
PASS_RUSH = ("defensive_sacks", "tackles", "defensive_misses", "safeties")

ALL_STAT_FIELDS: Tuple[str, ...] = PASSING + RUSHING + RECEIVING + COVERAGE + PASS_RUSH

POSITION_STAT_FIELDS: Dict[Position, Tuple[str, ...]] = {
    Position.QB: PASSING + ("rushing_yards", "rushing_touchdowns", "rushing_attempts"),
    Position.RB: RUSHING + ("receiving_yards", "receiving_touchdowns", "receptions", "targets"),
    Position.WR: RECEIVING,
    Position.TE: RECEIVING,
    Position.OL: (),
    Position.DE: PASS_RUSH,
    Position.LB: PASS_RUSH + ("defensive_interceptions", "passes_defended", "defensive_touchdowns"),
    Position.DB: COVERAGE + ("tackles", "defensive_misses"),
    Position.S: COVERAGE + ("tackles", "defensive_misses"),
    Position.K: (),
}


def parse_position(value: str) -> Position:
    """Position from its abbreviation, case-insensitive."""
    try:
        return Position((value or "").strip().upper())
    except ValueError:
        valid = ", ".join(p.value for p in Position)
        raise ValidationError(f"Unknown position '{value}'. Valid positions: {valid}")


def stat_fields_for(position) -> List[str]:
    if not isinstance(position, Position):
        position = parse_position(position)
    return list(POSITION_STAT_FIELDS[position])


def validate_stat_line(position, stats: Mapping[str, int]) -> None:
    """
    Reject non-zero values in fields the position does not record.

    Raises:
        ValidationError: naming the offending fields
    """
    if not isinstance(position, Position):
        position = parse_position(position)
    allowed = set(POSITION_STAT_FIELDS[position])
    unknown = [name for name in stats if name not in ALL_STAT_FIELDS]
    if unknown:
        raise ValidationError(f"Unknown stat fields: {', '.join(sorted(unknown))}")

    stray = sorted(name for name, value in stats.items() if value and name not in allowed)
    if stray:
        raise ValidationError(
            f"Fields not recorded for {position.value}: {', '.join(stray)}"
        )
