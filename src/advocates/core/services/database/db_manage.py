"""Schema management for the advocates database."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.advocates.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, database: DbSessionService | None = None):
        self._engine: Engine = (database or DbSessionService()).engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.advocates.entities.advocate import AdvocateTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop every table, which is the only way advocates are ever deleted."""
        from src.advocates.entities.advocate import AdvocateTable  # noqa: F401

        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Database tables dropped.")
