"""
Bet settlement for finished games, and its reversal.

Bet lifecycle:

    pending (won=None) --finalize--> won  (won=True,  payout credited)
                                 +-> lost (won=False, nothing credited)
                                 +-> push (won=False, stake refunded; tied game)
    won | lost | push --unfinalize--> pending (credit taken back)
    any               --void------> deleted (stake refunded, credit taken back)

Winner: the higher score. Equal scores are a push and every stake is
returned, rather than silently awarding the game to team2.

Payout for a winning bet is floor(amount × multiplier / 100), computed the
same way when it has to be taken back.

Finalize only touches bets with won IS NULL and unfinalize only bets with
won IS NOT NULL, so running either twice in a row changes nothing the
second time. Each run is one transaction under the game's lock.
"""
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.orm import Session

from app.core import metrics
from app.core.exceptions import GameNotFoundError
from app.core.logging import get_logger
from app.models import Game
from app.repositories import BetRepository, GameRepository
from app.services.betting.bet_ledger import BetLedger
from app.services.betting.game_locks import game_locks
from app.services.probability.odds import payout_for

logger = get_logger(__name__)

PUSH = "push"


@dataclass
class SettlementResult:
    """What a settlement run did."""
    game_id: str
    action: str  # finalize / unfinalize / void
    winner: Optional[str] = None  # team name, "push", or None
    won: int = 0
    lost: int = 0
    pushed: int = 0
    reopened: int = 0
    voided: int = 0
    coins_paid: int = 0
    coins_reversed: int = 0
    skipped_reason: Optional[str] = None
    bet_ids: list = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def to_dict(self) -> dict:
        return {
            "gameId": self.game_id,
            "action": self.action,
            "winner": self.winner,
            "won": self.won,
            "lost": self.lost,
            "pushed": self.pushed,
            "reopened": self.reopened,
            "voided": self.voided,
            "coinsPaid": self.coins_paid,
            "coinsReversed": self.coins_reversed,
            "skippedReason": self.skipped_reason,
        }


def determine_winner(game) -> Optional[str]:
    """
    Winning team name, PUSH for a tie, or None when a score is missing.
    """
    if game.team1_score is None or game.team2_score is None:
        return None
    if game.team1_score > game.team2_score:
        return game.team1
    if game.team2_score > game.team1_score:
        return game.team2
    return PUSH


class SettlementService:
    """Resolves and un-resolves the bets of a game."""

    def __init__(self, db: Session):
        self.db = db
        self.games = GameRepository(db)
        self.bets = BetRepository(db)
        self.ledger = BetLedger(db)

    # ========================================================================
    # Standalone entry points (own lock and transaction)
    # ========================================================================

    def settle_game(self, game_id: str) -> SettlementResult:
        """Resolve every pending bet of a final game and commit."""
        return self._run(game_id, "finalize")

    def unsettle_game(self, game_id: str) -> SettlementResult:
        """Return every settled bet of a game to pending and commit."""
        return self._run(game_id, "unfinalize")

    def _run(self, game_id: str, action: str) -> SettlementResult:
        with game_locks.hold(game_id):
            try:
                game = self.games.find_for_update(game_id)
                if game is None:
                    raise GameNotFoundError(game_id)

                if action == "finalize":
                    if not game.is_final:
                        result = SettlementResult(game_id=game_id, action=action, skipped_reason="not_final")
                        metrics.record_settlement(action, "skipped")
                        return result
                    result = self.resolve_bets(game)
                else:
                    result = self.unresolve_bets(game)

                self.db.commit()
                return result
            except Exception:
                self.db.rollback()
                metrics.record_settlement(action, "failed")
                logger.exception(f"Settlement ({action}) failed for game {game_id}")
                raise

    # ========================================================================
    # In-transaction operations (caller holds the lock and commits)
    # ========================================================================

    def resolve_bets(self, game: Game) -> SettlementResult:
        """Settle the game's pending bets against its final score."""
        result = SettlementResult(game_id=game.id, action="finalize")

        winner = determine_winner(game)
        if winner is None:
            result.skipped_reason = "missing_score"
            metrics.record_settlement("finalize", "skipped")
            logger.warning(
                f"Cannot settle game {game.id}: score missing "
                f"({game.team1_score!r}-{game.team2_score!r})",
                extra={"game_id": game.id},
            )
            return result

        result.winner = winner
        for bet in self.bets.find_unresolved_for_game(game.id):
            if winner == PUSH:
                bet.won = False
                bet.status = "push"
                self.ledger.credit_or_debit(bet.user_id, bet.amount)
                result.pushed += 1
                result.coins_paid += bet.amount
            elif bet.picked_team == winner:
                payout = payout_for(bet.amount, bet.multiplier)
                bet.won = True
                bet.status = "won"
                self.ledger.credit_or_debit(bet.user_id, payout)
                result.won += 1
                result.coins_paid += payout
            else:
                bet.won = False
                bet.status = "lost"
                result.lost += 1
            result.bet_ids.append(bet.id)
            metrics.bets_settled_total.labels(outcome=bet.status).inc()

        metrics.coins_paid_out_total.inc(result.coins_paid)
        metrics.record_settlement("finalize", "applied")
        logger.info(
            f"Settled game {game.id}: winner={winner} won={result.won} lost={result.lost} "
            f"push={result.pushed} paid={result.coins_paid}",
            extra={"game_id": game.id},
        )
        return result

    def unresolve_bets(self, game: Game) -> SettlementResult:
        """Take back every credit made for the game's settled bets and reopen them."""
        result = SettlementResult(game_id=game.id, action="unfinalize")

        for bet in self.bets.find_resolved_for_game(game.id):
            refund = credited_for(bet)
            if refund:
                self.ledger.credit_or_debit(bet.user_id, -refund)
                result.coins_reversed += refund

            bet.won = None
            bet.status = "pending"
            result.reopened += 1
            result.bet_ids.append(bet.id)

        metrics.coins_reversed_total.inc(result.coins_reversed)
        metrics.record_settlement("unfinalize", "applied")
        logger.info(
            f"Reopened {result.reopened} bets on game {game.id}, reversed {result.coins_reversed} coins",
            extra={"game_id": game.id},
        )
        return result

    def void_bets(self, game: Game) -> SettlementResult:
        """
        Cancel every bet of a game that is about to be deleted.

        Each bettor ends up as if the bet was never placed: the stake comes
        back and whatever settlement credited for it is taken back, as one
        net balance change per bet.
        """
        result = SettlementResult(game_id=game.id, action="void")

        bets = self.bets.find_unresolved_for_game(game.id) + self.bets.find_resolved_for_game(game.id)
        for bet in bets:
            delta = bet.amount - credited_for(bet)
            if delta:
                self.ledger.credit_or_debit(bet.user_id, delta)
            if delta > 0:
                result.coins_paid += delta
            else:
                result.coins_reversed -= delta
            result.voided += 1
            result.bet_ids.append(bet.id)

        metrics.coins_paid_out_total.inc(result.coins_paid)
        metrics.coins_reversed_total.inc(result.coins_reversed)
        metrics.record_settlement("void", "applied")
        logger.info(
            f"Voided {result.voided} bets on game {game.id}: refunded {result.coins_paid}, "
            f"reversed {result.coins_reversed}",
            extra={"game_id": game.id},
        )
        return result


def credited_for(bet) -> int:
    """Coins settlement has credited for a bet: the payout, the refunded stake, or nothing."""
    if bet.won:
        return payout_for(bet.amount, bet.multiplier)
    if bet.status == PUSH:
        return bet.amount
    return 0
