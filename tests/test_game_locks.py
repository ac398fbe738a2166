"""Tests for the per-game lock registry."""
import threading

from app.services.betting import GameLockRegistry


class TestGameLockRegistry:

    def test_same_game_shares_a_lock(self):
        registry = GameLockRegistry()
        assert registry.lock_for("g1") is registry.lock_for("g1")
        assert registry.lock_for("g1") is not registry.lock_for("g2")

    def test_hold_excludes_other_threads(self):
        registry = GameLockRegistry()
        acquired = threading.Event()

        def contender():
            with registry.hold("g1"):
                acquired.set()

        with registry.hold("g1"):
            worker = threading.Thread(target=contender)
            worker.start()
            assert not acquired.wait(timeout=0.2)

        worker.join(timeout=2)
        assert acquired.is_set()

    def test_other_games_are_not_blocked(self):
        registry = GameLockRegistry()
        with registry.hold("g1"):
            assert registry.lock_for("g2").acquire(blocking=False)
            registry.lock_for("g2").release()

    def test_discard_forgets_lock(self):
        registry = GameLockRegistry()
        first = registry.lock_for("g1")
        registry.discard("g1")
        assert registry.lock_for("g1") is not first
