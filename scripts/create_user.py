#!/usr/bin/env python3
"""
Create a league user and print their API key.

There is no sign-up endpoint; the commissioner creates accounts with this
script (the first one should be an admin).

Usage:
    python scripts/create_user.py USERNAME [--role admin|streamer|user] [--coins N]
    python scripts/create_user.py USERNAME --rotate-key
"""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.database import SessionLocal, init_db
from app.core.exceptions import LeagueHubError
from app.services.league import UserService

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a league user")
    parser.add_argument("username")
    parser.add_argument("--role", default="user", choices=["admin", "streamer", "user"])
    parser.add_argument(
        "--coins",
        type=int,
        default=None,
        help="Starting balance (default: unset, reads as DEFAULT_COINS)"
    )
    parser.add_argument("--rotate-key", action="store_true", help="Issue a new API key for an existing user")
    args = parser.parse_args()

    init_db()
    db = SessionLocal()
    try:
        service = UserService(db)
        if args.rotate_key:
            api_key = service.rotate_api_key(args.username)
        else:
            user, api_key = service.create_user(args.username, role=args.role, coins=args.coins)
            logger.info(f"User id: {user.id}")
        logger.info(f"API key for {args.username}: {api_key}")
        return 0
    except LeagueHubError as e:
        logger.error(e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
