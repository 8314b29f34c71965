"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import Session, create_engine

from usergen.runtime.config.config_data import DatabaseConfig
from usergen.runtime.context import get_config


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig | None = None):
        """Create the engine for ``db_config`` (defaults to the current config)."""
        db_config = db_config or get_config().database
        self._config = db_config

        logger.debug("Initializing database engine for {}", db_config.connection_string)
        self._engine = create_engine(
            db_config.connection_string,
            echo=db_config.echo,
            connect_args=self._get_connect_args(db_config),
        )

    @staticmethod
    def _get_connect_args(db_config: DatabaseConfig) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if db_config.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": db_config.sqlite_timeout,  # Lock timeout
                }
            )

        return connect_args

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Entities are read after commit
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session for one logical operation; always closed on exit."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}", type(e).__name__, e
            )
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
