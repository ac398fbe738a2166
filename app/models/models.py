"""
Database models for the league hub.

Teams are identified by name everywhere in the betting core (standings,
games, bets), so there are no team foreign keys on those tables.
"""
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Boolean, Text, Index, UniqueConstraint
from sqlalchemy.orm import relationship, declarative_base

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """League site user. `coins` is NULL until the user's balance is first touched."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(100), unique=True, nullable=False, index=True)
    api_key = Column(String(64), unique=True, nullable=True, index=True)
    role = Column(String(20), nullable=False, default="user")  # admin, streamer, user
    coins = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    bets = relationship("Bet", back_populates="user", cascade="all, delete-orphan")
    predictions = relationship("Prediction", back_populates="user", cascade="all, delete-orphan")
    articles = relationship("NewsArticle", back_populates="author")


class Team(Base):
    """League team. Division strings look like 'AFC_D1'; the prefix is the conference."""
    __tablename__ = "teams"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), unique=True, nullable=False)
    division = Column(String(10), nullable=True)
    city = Column(String(100), nullable=True)
    colors = Column(String(100), nullable=True)  # e.g. "red,white,blue"
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class Standing(Base):
    """One row per team per season and division."""
    __tablename__ = "standings"

    id = Column(String(36), primary_key=True, default=_uuid)
    team = Column(String(100), nullable=False, index=True)
    season = Column(Integer, nullable=False, default=1, index=True)
    division = Column(String(10), nullable=False)
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)
    point_differential = Column(Integer, nullable=False, default=0)
    manual_order = Column(Integer, nullable=True)  # Admin override, lower = better
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('team', 'division', 'season', name='uq_standings_team_division_season'),
    )


class Game(Base):
    """Scheduled, live or final game between team1 and team2."""
    __tablename__ = "games"

    id = Column(String(36), primary_key=True, default=_uuid)
    week = Column(Integer, nullable=False, index=True)
    season = Column(Integer, nullable=False, default=1, index=True)
    team1 = Column(String(100), nullable=False)
    team2 = Column(String(100), nullable=False)
    team1_score = Column(Integer, nullable=True, default=0)
    team2_score = Column(Integer, nullable=True, default=0)
    quarter = Column(String(20), nullable=True, default="Scheduled")  # Scheduled, Q1-Q4, 1st-4th, OT, FINAL
    game_time = Column(DateTime, nullable=True)
    location = Column(String(200), nullable=True)
    is_final = Column(Boolean, nullable=False, default=False)
    is_live = Column(Boolean, nullable=False, default=False)
    stream_link = Column(Text, nullable=True)
    last_play = Column(Text, nullable=True)
    ball_position = Column(Integer, nullable=True, default=50)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    bets = relationship("Bet", back_populates="game", cascade="all, delete-orphan")
    plays = relationship("GamePlay", back_populates="game", cascade="all, delete-orphan")
    predictions = relationship("Prediction", back_populates="game", cascade="all, delete-orphan")

    __table_args__ = (
        Index('ix_games_season_week', 'season', 'week'),
    )


class Bet(Base):
    """
    Coin wager on one side of a game.

    `multiplier` is the decimal odds locked at placement, stored ×100
    (200 = 2.00x). `won` is NULL while pending.
    """
    __tablename__ = "bets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    game_id = Column(String(36), ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    picked_team = Column(String(100), nullable=False)
    multiplier = Column(Integer, nullable=False)
    won = Column(Boolean, nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending, won, lost, push
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="bets")
    game = relationship("Game", back_populates="bets")

    __table_args__ = (
        Index('ix_bets_game_won', 'game_id', 'won'),
    )


class ChatMessage(Base):
    """Chat line, stored after profanity filtering. game_id NULL = site-wide chat."""
    __tablename__ = "chat_messages"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(100), nullable=False)
    message = Column(Text, nullable=False)
    game_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)


class GamePlay(Base):
    """Play-by-play entry."""
    __tablename__ = "game_plays"

    id = Column(String(36), primary_key=True, default=_uuid)
    game_id = Column(String(36), ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    quarter = Column(String(20), nullable=False)
    play_type = Column(String(50), nullable=False)  # pass, rush, sack, interception, touchdown, ...
    team = Column(String(100), nullable=False)
    player_name = Column(String(100), nullable=True)
    description = Column(Text, nullable=False)
    yards_gained = Column(Integer, nullable=False, default=0)
    points_added = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    game = relationship("Game", back_populates="plays")


class NewsArticle(Base):
    """League news post. `excerpt` is the teaser shown in lists."""
    __tablename__ = "news"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    author = relationship("User", back_populates="articles")


class Prediction(Base):
    """A fan's pick for who wins a game. No coins involved; one per user per game."""
    __tablename__ = "predictions"

    id = Column(String(36), primary_key=True, default=_uuid)
    game_id = Column(String(36), ForeignKey("games.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    voted_for = Column(String(100), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    game = relationship("Game", back_populates="predictions")
    user = relationship("User", back_populates="predictions")

    __table_args__ = (
        UniqueConstraint('user_id', 'game_id', name='uq_predictions_user_game'),
    )


class PlayerStats(Base):
    """Weekly stat line. Only the fields recorded for `position` are non-zero."""
    __tablename__ = "player_stats"

    id = Column(String(36), primary_key=True, default=_uuid)
    player_name = Column(String(100), nullable=False, index=True)
    team = Column(String(100), nullable=False)
    position = Column(String(10), nullable=False)
    week = Column(Integer, nullable=False)

    # QB
    passing_yards = Column(Integer, nullable=False, default=0)
    passing_touchdowns = Column(Integer, nullable=False, default=0)
    interceptions = Column(Integer, nullable=False, default=0)
    completions = Column(Integer, nullable=False, default=0)
    attempts = Column(Integer, nullable=False, default=0)
    sacks = Column(Integer, nullable=False, default=0)

    # RB
    rushing_yards = Column(Integer, nullable=False, default=0)
    rushing_touchdowns = Column(Integer, nullable=False, default=0)
    rushing_attempts = Column(Integer, nullable=False, default=0)
    missed_tackles_forced = Column(Integer, nullable=False, default=0)

    # WR / TE
    receiving_yards = Column(Integer, nullable=False, default=0)
    receiving_touchdowns = Column(Integer, nullable=False, default=0)
    receptions = Column(Integer, nullable=False, default=0)
    targets = Column(Integer, nullable=False, default=0)
    yards_after_catch = Column(Integer, nullable=False, default=0)

    # DB / S
    defensive_interceptions = Column(Integer, nullable=False, default=0)
    passes_defended = Column(Integer, nullable=False, default=0)
    completions_allowed = Column(Integer, nullable=False, default=0)
    targets_allowed = Column(Integer, nullable=False, default=0)
    swats = Column(Integer, nullable=False, default=0)
    defensive_touchdowns = Column(Integer, nullable=False, default=0)

    # DEF
    defensive_sacks = Column(Integer, nullable=False, default=0)
    tackles = Column(Integer, nullable=False, default=0)
    defensive_misses = Column(Integer, nullable=False, default=0)
    safeties = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
