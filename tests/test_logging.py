"""Unit tests for structured logging."""
import json
import logging

from app.core.logging import JSONFormatter, clear_correlation_id, set_correlation_id


def make_record(**extra):
    record = logging.LogRecord("app.test", logging.WARNING, __file__, 1, "Balance of %s floored", ("u1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "app.test"
        assert data["message"] == "Balance of u1 floored"
        assert "extra" not in data

    def test_extra_context_and_correlation_id(self):
        token = set_correlation_id("req-42")
        try:
            data = json.loads(JSONFormatter().format(make_record(user_id="u1", clamped=80)))
        finally:
            clear_correlation_id(token)

        assert data["correlation_id"] == "req-42"
        assert data["extra"] == {"user_id": "u1", "clamped": 80}


class TestServiceLogging:

    def test_settlement_summary_reaches_json_output(self, db_session, users, scheduled_game, caplog):
        from app.services.betting import BetLedger
        from app.services.league import GameService

        BetLedger(db_session).place_bet(users["alice"].id, scheduled_game.id, "Aces", 50, odds=2.0)
        with caplog.at_level(logging.INFO, logger="app.services.league.game_service"):
            GameService(db_session).update_game(scheduled_game.id, {
                "team1_score": 14, "team2_score": 3, "is_final": True,
            })

        record = next(r for r in caplog.records if getattr(r, "action", None) == "finalize")
        data = json.loads(JSONFormatter().format(record))
        assert data["logger"] == "app.services.league.game_service"
        assert data["extra"]["won"] == 1
