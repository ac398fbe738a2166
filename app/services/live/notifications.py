"""
Live/final transition detection for client notifications.

Clients poll the game list and keep a snapshot of what each game looked
like last time; this module compares the current games against that
snapshot and says which games just went live or just went final. The
snapshot is passed in and handed back, so there is no hidden state.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

LIVE_QUARTER_MARKERS = ("1st", "2nd", "3rd", "4th")


@dataclass(frozen=True)
class GameState:
    is_live: bool = False
    is_final: bool = False


@dataclass
class GameNotification:
    game_id: str
    kind: str  # game_live / game_final
    title: str
    description: str

    def to_dict(self) -> dict:
        return {
            "gameId": self.game_id,
            "kind": self.kind,
            "title": self.title,
            "description": self.description,
        }


def observe_state(game) -> GameState:
    """
    Derive live/final flags from a game, trusting the quarter label as well
    as the flags: "FINAL" anywhere in the quarter means final, and a
    1st-4th quarter label on a non-final game means live.
    """
    quarter = game.quarter or ""
    is_final = bool(game.is_final) or "FINAL" in quarter.upper()
    is_live = bool(game.is_live) or (
        not is_final and any(marker in quarter for marker in LIVE_QUARTER_MARKERS)
    )
    return GameState(is_live=is_live, is_final=is_final)


def diff_game_states(
    games: Iterable,
    previous: Optional[Dict[str, GameState]] = None,
    notify_live: bool = True,
    notify_final: bool = True,
) -> Tuple[List[GameNotification], Dict[str, GameState]]:
    """
    Compare games against the previous snapshot.

    Args:
        games: Current games (id, team1, team2, scores, quarter, is_live, is_final)
        previous: game id -> state from the last poll; unknown games count as
            neither live nor final
        notify_live: Emit game_live events
        notify_final: Emit game_final events

    Returns:
        (notifications, new snapshot). The new snapshot carries forward entries
        for games absent from `games`.
    """
    snapshot: Dict[str, GameState] = dict(previous or {})
    events: List[GameNotification] = []

    for game in games:
        state = observe_state(game)
        before = snapshot.get(game.id, GameState())

        if notify_final and state.is_final and not before.is_final:
            events.append(GameNotification(
                game_id=game.id,
                kind="game_final",
                title="Game Final",
                description=f"{game.team1} {game.team1_score or 0} - {game.team2} {game.team2_score or 0}",
            ))

        if notify_live and state.is_live and not before.is_live:
            events.append(GameNotification(
                game_id=game.id,
                kind="game_live",
                title="Game Live!",
                description=f"{game.team1} vs {game.team2} is now live!",
            ))

        snapshot[game.id] = state

    return events, snapshot
