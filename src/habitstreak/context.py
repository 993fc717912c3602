"""Application context for dependency injection."""

from __future__ import annotations

import atexit
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import SQLModelHabitRepository
from .logging_config import get_logger
from .services.dates import local_today
from .services.habits import HabitService

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Store handle and services, created at startup and disposed at shutdown."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    habit_repo: SQLModelHabitRepository
    habit_service: HabitService

    def today(self) -> str:
        """Resolve the local calendar day once for the current request or command."""
        return local_today(self.config.TIMEZONE)

    def dispose(self) -> None:
        """Release pooled database connections and drop the exit hook."""
        atexit.unregister(self.dispose)
        self.engine.dispose()
        logger.debug("Application context disposed")


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    habit_repo = SQLModelHabitRepository(session_factory)
    logger.info("Application context created", extra={"database_url": config.DATABASE_URL})

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=habit_repo,
        habit_service=HabitService(habit_repo),
    )


__all__ = ["AppContext", "create_app_context"]
