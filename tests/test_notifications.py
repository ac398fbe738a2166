"""Unit tests for live/final transition detection."""
from types import SimpleNamespace

from app.services.live.notifications import GameState, diff_game_states, observe_state


def game(game_id="g1", quarter="Scheduled", is_live=False, is_final=False, score1=0, score2=0):
    return SimpleNamespace(
        id=game_id, team1="Aces", team2="Bears", team1_score=score1, team2_score=score2,
        quarter=quarter, is_live=is_live, is_final=is_final,
    )


class TestObserveState:

    def test_quarter_label_implies_live(self):
        assert observe_state(game(quarter="2nd Quarter")) == GameState(is_live=True, is_final=False)

    def test_final_label_implies_final_not_live(self):
        assert observe_state(game(quarter="Final - 4th")) == GameState(is_live=False, is_final=True)

    def test_scheduled(self):
        assert observe_state(game()) == GameState()


class TestDiffGameStates:

    def test_each_transition_is_reported_once(self):
        events, snapshot = diff_game_states([game(is_live=True, quarter="1st")], {})
        assert [e.kind for e in events] == ["game_live"]

        events, snapshot = diff_game_states([game(is_live=True, quarter="2nd")], snapshot)
        assert events == []

        final = game(is_final=True, quarter="FINAL", score1=24, score2=17)
        events, snapshot = diff_game_states([final], snapshot)
        assert [e.kind for e in events] == ["game_final"]
        assert events[0].description == "Aces 24 - Bears 17"

        events, _ = diff_game_states([final], snapshot)
        assert events == []

    def test_unknown_game_counts_as_not_started(self):
        events, snapshot = diff_game_states([game(is_final=True, quarter="FINAL")], None)
        assert [e.kind for e in events] == ["game_final"]
        assert snapshot["g1"].is_final

    def test_flags_turn_off_event_kinds(self):
        events, snapshot = diff_game_states(
            [game("a", is_live=True), game("b", is_final=True)],
            {},
            notify_live=False,
        )
        assert [(e.game_id, e.kind) for e in events] == [("b", "game_final")]
        # State is still recorded for suppressed events
        assert snapshot["a"].is_live

    def test_absent_games_are_carried_forward(self):
        previous = {"old": GameState(is_live=True)}
        _, snapshot = diff_game_states([game("new")], previous)
        assert snapshot["old"] == GameState(is_live=True)
        assert "new" in snapshot

    def test_previous_snapshot_not_mutated(self):
        previous = {}
        diff_game_states([game(is_live=True)], previous)
        assert previous == {}
