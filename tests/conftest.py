"""Pytest configuration and shared fixtures for HabitStreak tests.

Provides an isolated SQLite database per test, repository/service fixtures,
a habit factory and a Flask test client wired to a temporary data directory.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitstreak import create_app
from habitstreak.config import TestingConfig
from habitstreak.infra.database import create_session_factory
from habitstreak.infra.repositories import SQLModelHabitRepository
from habitstreak.models import Habit
from habitstreak.services.habits import HabitService

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    """Keep config-created directories and databases under tmp_path."""
    monkeypatch.setenv("HABITSTREAK_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.delenv("HABITSTREAK_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITSTREAK_TIMEZONE", raising=False)


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one repositories receive at runtime."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def habit_service(habit_repo) -> HabitService:
    return HabitService(habit_repo)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(habit_repo):
    """Factory for creating persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Exercise",
        description: str = "30 minutes daily",
        icon: str = "🏃",
        color: str = "#10B981",
    ) -> Habit:
        return habit_repo.create(
            Habit(name=name, description=description, icon=icon, color=color)
        )

    return _create_habit


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def app(tmp_path):
    """Flask app backed by a database file under tmp_path."""
    config = TestingConfig(data_dir=tmp_path / "app-data")
    flask_app = create_app(config)
    yield flask_app
    flask_app.extensions["habitstreak"].dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def app_habit(app) -> Habit:
    """A habit persisted through the app's own repository."""
    repo = app.extensions["habitstreak"].habit_repo
    return repo.create(Habit(name="Meditation", icon="🧘", description="Daily mindfulness"))
