"""Player stat helpers."""

from app.services.stats.stat_fields import (
    ALL_STAT_FIELDS,
    POSITION_STAT_FIELDS,
    Position,
    parse_position,
    stat_fields_for,
    validate_stat_line,
)

__all__ = [
    "ALL_STAT_FIELDS",
    "POSITION_STAT_FIELDS",
    "Position",
    "parse_position",
    "stat_fields_for",
    "validate_stat_line",
]
