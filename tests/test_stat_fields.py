"""Unit tests for the position -> stat field mapping."""
import pytest

from app.core.exceptions import ValidationError
from app.services.stats import (
    ALL_STAT_FIELDS,
    POSITION_STAT_FIELDS,
    Position,
    parse_position,
    stat_fields_for,
    validate_stat_line,
)


class TestStatFields:

    def test_every_position_is_mapped(self):
        assert set(POSITION_STAT_FIELDS) == set(Position)

    def test_mapped_fields_exist(self):
        for fields in POSITION_STAT_FIELDS.values():
            assert set(fields) <= set(ALL_STAT_FIELDS)

    def test_quarterback_fields(self):
        fields = stat_fields_for("qb")
        assert "passing_yards" in fields
        assert "receptions" not in fields

    def test_parse_position(self):
        assert parse_position(" wr ") is Position.WR
        with pytest.raises(ValidationError):
            parse_position("QBX")


class TestValidateStatLine:

    def test_accepts_position_fields(self):
        validate_stat_line("WR", {"receiving_yards": 88, "receptions": 6})

    def test_zero_outside_position_is_fine(self):
        validate_stat_line("WR", {"receiving_yards": 88, "passing_yards": 0})

    def test_rejects_nonzero_outside_position(self):
        with pytest.raises(ValidationError) as exc:
            validate_stat_line(Position.DB, {"passing_yards": 12, "swats": 2})
        assert "passing_yards" in exc.value.message

    def test_rejects_unknown_field(self):
        with pytest.raises(ValidationError):
            validate_stat_line("QB", {"fantasy_points": 20})
