"""Schema management."""

from loguru import logger
from sqlmodel import SQLModel

from .db_session import DbSessionService


class DbManageService:
    def __init__(self, db: DbSessionService):
        self._engine = db.engine

    def create_all(self) -> None:
        """Create all database tables that do not exist yet."""
        from usergen.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")
