"""
User repository: lookups and coin balances.
"""
from typing import Optional, List, Tuple

from app.models import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for users and their coin balances."""

    def __init__(self, db, default_coins: int = 1000):
        super().__init__(User, db)
        self.default_coins = default_coins

    def find_by_api_key(self, api_key: str) -> Optional[User]:
        return self.where_first(User.api_key == api_key)

    def find_by_username(self, username: str) -> Optional[User]:
        return self.where_first(User.username == username)

    def find_for_update(self, user_id: str) -> Optional[User]:
        """Load a user with a row lock (no-op on SQLite) and fresh attributes."""
        return (
            self.db.query(User)
            .filter(User.id == user_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def balance_of(self, user: Optional[User]) -> int:
        if user is None or user.coins is None:
            return self.default_coins
        return user.coins

    def apply_delta(self, user: User, delta: int) -> Tuple[int, int]:
        """
        Add `delta` coins to a locked user row, flooring the balance at zero.

        Returns:
            (new balance, coins that could not be debited because of the floor)
        """
        target = self.balance_of(user) + delta
        new_balance = max(0, target)
        user.coins = new_balance
        # Later row reloads in the same transaction must see this value
        self.db.flush()
        return new_balance, new_balance - target

    def top_by_coins(self, limit: int = 10) -> List[User]:
        """Richest users first; users without a recorded balance count as the default."""
        users = self.db.query(User).all()
        users.sort(key=self.balance_of, reverse=True)
        return users[:limit]
