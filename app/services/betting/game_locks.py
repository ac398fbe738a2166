"""
Per-game locks.

Bet placement, settlement and game deletion for the same game run one at a
time within a process, so a bet cannot slip in between a finalize reading
the pending bets and committing their results.

The HTTP handlers are `async def` and all run on the event-loop thread. Two
of them never interleave inside a held lock because the locked sections
make blocking database calls and contain no `await`; the lock itself only
excludes other threads (scripts, threadpool work). It is not re-entrant:
an `await` inside `hold()` would let a second request on the same thread
block the loop, so locked sections must stay synchronous.

Across processes the row locks taken inside the transactions
(SELECT ... FOR UPDATE) do the same job on PostgreSQL.
"""
import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class GameLockRegistry:
    """Lazily created lock per game id."""

    def __init__(self):
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, game_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[game_id] = lock
            return lock

    @contextmanager
    def hold(self, game_id: str) -> Iterator[None]:
        """Hold the game's lock for the duration of the block."""
        lock = self.lock_for(game_id)
        with lock:
            yield

    def discard(self, game_id: str) -> None:
        """Forget a deleted game's lock."""
        with self._guard:
            self._locks.pop(game_id, None)


game_locks = GameLockRegistry()
