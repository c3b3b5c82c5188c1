"""Pytest fixtures for FitTrack tests."""

import os

# Point the application engine at SQLite before fittrack is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import Generator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fittrack.core.clock import FrozenClock, get_clock
from fittrack.core.security import create_access_token
from fittrack.database import get_db
from fittrack.main import app
from fittrack.models import Base
from fittrack.services.users import UserService

# Use SQLite in-memory for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Wednesday mid-morning, far from midnight so day arithmetic stays unambiguous
FROZEN_NOW = datetime(2024, 5, 15, 10, 30)


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """Create a fresh test database for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Override the get_db dependency
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        app.dependency_overrides.clear()


@pytest.fixture
def clock() -> FrozenClock:
    """A clock pinned to FROZEN_NOW."""
    return FrozenClock(FROZEN_NOW)


@pytest.fixture
def client(test_db: Session, clock: FrozenClock) -> TestClient:
    """Create a test client with test database and frozen clock."""
    app.dependency_overrides[get_clock] = lambda: clock
    app.state.limiter.enabled = False
    return TestClient(app)


@pytest.fixture
def user(test_db: Session):
    """A registered user with a complete biometric profile."""
    service = UserService(test_db)
    created = service.register("John Doe", "john@example.com", "password123")
    return service.update_profile(
        created.id,
        {
            "height": 175,
            "weight": 70,
            "age": 28,
            "gender": "male",
            "activity_level": "moderately_active",
        },
    )


@pytest.fixture
def other_user(test_db: Session):
    """A second account, for ownership checks."""
    return UserService(test_db).register("Jane Smith", "jane@example.com", "password123")


@pytest.fixture
def auth_token(user) -> str:
    """Create a valid authentication token for tests."""
    return create_access_token(user.id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict:
    """Create authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def other_auth_headers(other_user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def sample_workout_data() -> dict:
    """Sample workout payload for tests."""
    return {
        "type": "running",
        "duration": 30,
        "caloriesBurned": 300,
        "intensity": "high",
        "description": "Morning run",
    }


@pytest.fixture
def sample_nutrition_data() -> dict:
    """Sample nutrition payload for tests."""
    return {
        "foodItem": "Grilled chicken salad",
        "calories": 350,
        "protein": 35,
        "carbs": 15,
        "fats": 12,
        "mealType": "lunch",
        "servingSize": "1 bowl",
    }
