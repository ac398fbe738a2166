"""Shared pytest fixtures for league-hub-api tests."""
import os
import sys
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

# Settings are read at import time
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

ADMIN_KEY = "admin-test-key"
ALICE_KEY = "alice-test-key"
BOB_KEY = "bob-test-key"


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create fresh test database session with isolated in-memory database."""
    from app.models import Base

    # One connection shared by every thread, so TestClient requests and
    # WebSocket handlers see the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture
def users(db_session: Session):
    """An admin plus two bettors: alice with 100 coins, bob with no recorded balance."""
    from app.models import User

    admin = User(username="commish", api_key=ADMIN_KEY, role="admin", coins=1000)
    alice = User(username="alice", api_key=ALICE_KEY, role="user", coins=100)
    bob = User(username="bob", api_key=BOB_KEY, role="user", coins=None)
    db_session.add_all([admin, alice, bob])
    db_session.commit()
    return {"admin": admin, "alice": alice, "bob": bob}


@pytest.fixture
def four_team_standings(db_session: Session):
    """
    Four-team season 2 table:

        Aces    3-0  +30   rank 1
        Comets  2-1  +10   rank 2
        Dragons 1-2  -10   rank 3
        Bears   0-3  -30   rank 4
    """
    from app.models import Standing

    rows = [
        Standing(team="Aces", division="AFC_D1", season=2, wins=3, losses=0, point_differential=30),
        Standing(team="Comets", division="AFC_D1", season=2, wins=2, losses=1, point_differential=10),
        Standing(team="Dragons", division="NFC_D1", season=2, wins=1, losses=2, point_differential=-10),
        Standing(team="Bears", division="NFC_D1", season=2, wins=0, losses=3, point_differential=-30),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows


@pytest.fixture
def scheduled_game(db_session: Session):
    """Aces vs Bears, week 4 of season 2, not started."""
    from app.models import Game

    game = Game(week=4, season=2, team1="Aces", team2="Bears", team1_score=0, team2_score=0, quarter="Scheduled")
    db_session.add(game)
    db_session.commit()
    return game


@pytest.fixture
def make_game(db_session: Session):
    """Factory inserting a game with sensible defaults."""
    from app.models import Game

    def _make(**overrides):
        fields = dict(week=1, season=2, team1="Aces", team2="Bears", team1_score=0, team2_score=0, quarter="Scheduled")
        fields.update(overrides)
        game = Game(**fields)
        db_session.add(game)
        db_session.commit()
        return game

    return _make


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture(scope="function")
def test_client(db_session):
    """
    Create FastAPI TestClient with a fresh database for each test.

    Note: We don't use context manager (with TestClient) because it conflicts
    with Prometheus middleware that's added during app module initialization.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/v1/games")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from app.main import app
    from app.core.database import get_db

    test_db_session = db_session

    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def async_client(db_session: Session) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing FastAPI endpoints."""
    from app.main import app
    from app.core.database import get_db

    # Override database dependency to use test session
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
