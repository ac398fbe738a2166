"""
Betting services package: the coin ledger, settlement of finished games,
and the per-game locks both share.
"""

from app.services.betting.bet_ledger import BetLedger
from app.services.betting.game_locks import game_locks, GameLockRegistry
from app.services.betting.settlement_service import (
    SettlementService,
    SettlementResult,
    determine_winner,
)

__all__ = [
    "BetLedger",
    "game_locks",
    "GameLockRegistry",
    "SettlementService",
    "SettlementResult",
    "determine_winner",
]
