"""
Prometheus metrics for the league hub.

HTTP request metrics come from prometheus-fastapi-instrumentator (mounted in
app.main); this module holds the domain metrics:
- Bets placed / rejected and coins wagered
- Settlement runs and per-bet outcomes
- Coins paid out, reversed, and lost to the zero-balance clamp
- WebSocket relay connections and messages
- Database connection pool gauges
"""
from prometheus_client import Counter, Gauge

# Bet ledger
bets_placed_total = Counter(
    "bets_placed_total",
    "Total bets accepted"
)

bets_rejected_total = Counter(
    "bets_rejected_total",
    "Total bet placements rejected",
    ["reason"]
)

coins_wagered_total = Counter(
    "coins_wagered_total",
    "Total coins debited for accepted bets"
)

# Settlement
settlements_total = Counter(
    "settlements_total",
    "Settlement runs by action and result",
    ["action", "result"]
)

bets_settled_total = Counter(
    "bets_settled_total",
    "Bets resolved by outcome",
    ["outcome"]
)

coins_paid_out_total = Counter(
    "coins_paid_out_total",
    "Coins credited by settlement (winnings and push refunds)"
)

coins_reversed_total = Counter(
    "coins_reversed_total",
    "Coins debited when settlements are undone"
)

balance_clamped_coins_total = Counter(
    "balance_clamped_coins_total",
    "Coins that could not be debited because the balance would go negative"
)

# Live relay
websocket_connections = Gauge(
    "websocket_connections",
    "Currently connected WebSocket clients"
)

websocket_messages_total = Counter(
    "websocket_messages_total",
    "WebSocket messages handled",
    ["type", "direction"]
)

# Database
db_pool_connections = Gauge(
    "db_pool_connections",
    "Number of database connections in the pool"
)

db_pool_connections_checked_out = Gauge(
    "db_pool_connections_checked_out",
    "Number of checked out database connections"
)


def update_db_pool_metrics():
    """
    Update database pool gauges from the SQLAlchemy engine.

    SQLite's default pool does not report sizes; those gauges are left alone.
    """
    from app.core.database import engine

    pool = engine.pool
    try:
        db_pool_connections.set(pool.size())
        db_pool_connections_checked_out.set(pool.checkedout())
    except AttributeError:
        pass


def record_bet_placed(amount: int):
    bets_placed_total.inc()
    coins_wagered_total.inc(amount)


def record_bet_rejected(reason: str):
    bets_rejected_total.labels(reason=reason).inc()


def record_settlement(action: str, result: str):
    """Record a settlement run (action: finalize/unfinalize/void, result: applied/skipped/failed)."""
    settlements_total.labels(action=action, result=result).inc()
