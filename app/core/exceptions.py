"""
Domain exceptions raised by services and translated to HTTP errors by routes.

Services never raise HTTPException themselves; each route catches these and
maps `status_code` onto the response.
"""


class LeagueHubError(Exception):
    """Base class for expected, per-request failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LeagueHubError):
    """Malformed input: bad amount, unknown team, out-of-range odds, ..."""

    status_code = 400


class InsufficientFundsError(ValidationError):
    """Wager exceeds the user's coin balance."""

    def __init__(self, balance: int, amount: int):
        super().__init__(f"Insufficient balance: {balance} coins available, {amount} requested")
        self.balance = balance
        self.amount = amount


class NotFoundError(LeagueHubError):
    status_code = 404


class GameNotFoundError(NotFoundError):
    def __init__(self, game_id: str):
        super().__init__(f"Game {game_id} not found")
        self.game_id = game_id


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class StandingNotFoundError(NotFoundError):
    def __init__(self, standing_id: str):
        super().__init__(f"Standing {standing_id} not found")
        self.standing_id = standing_id


class NewsNotFoundError(NotFoundError):
    def __init__(self, article_id: str):
        super().__init__(f"News article {article_id} not found")
        self.article_id = article_id


class StatLineNotFoundError(NotFoundError):
    def __init__(self, stat_id: str):
        super().__init__(f"Player stat line {stat_id} not found")
        self.stat_id = stat_id
