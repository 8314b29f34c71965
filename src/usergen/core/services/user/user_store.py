"""Persistence of generated users."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from usergen.core.exceptions import StorageError
from usergen.core.services.database import DbManageService, DbSessionService
from usergen.entities.user import User, UserRepository


class SaveOutcome(str, Enum):
    SAVED = "saved"
    DUPLICATE = "duplicate"
    FAILED = "failed"


@dataclass(frozen=True)
class SaveResult:
    user: User
    outcome: SaveOutcome
    detail: str | None = None


@dataclass
class SaveReport:
    """Per-row outcomes of a batch insert."""

    results: list[SaveResult] = field(default_factory=list)

    def _count(self, outcome: SaveOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def saved(self) -> int:
        return self._count(SaveOutcome.SAVED)

    @property
    def skipped(self) -> int:
        return self._count(SaveOutcome.DUPLICATE)

    @property
    def failed(self) -> int:
        return self._count(SaveOutcome.FAILED)

    def __str__(self) -> str:
        return f"{self.saved}/{self.total}"


def is_unique_violation(error: IntegrityError) -> bool:
    """Whether ``error`` was raised by a UNIQUE constraint."""
    orig = error.orig
    if getattr(orig, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    if getattr(orig, "pgcode", None) == "23505":
        return True
    return "UNIQUE constraint failed" in str(orig)


class UserStore:
    """Owns the ``Users`` table: schema creation, batch insert and listing.

    Every operation opens its own session, which is closed when it returns.
    """

    def __init__(self, db: DbSessionService, today: Callable[[], date] = date.today) -> None:
        self._db = db
        self._today = today

    def init_schema(self) -> None:
        """Create the ``Users`` table if it does not exist."""
        try:
            DbManageService(self._db).create_all()
        except SQLAlchemyError as e:
            raise StorageError("schema initialization", e) from e

    def save_all(self, users: Iterable[User]) -> SaveReport:
        """Insert each user in its own transaction, skipping duplicate emails."""
        report = SaveReport()
        today = self._today()

        with self._db.session_scope() as session:
            repo = UserRepository(session)

            for user in users:
                try:
                    stored = repo.create(user, age=user.age_at(today))
                    session.commit()
                except IntegrityError as e:
                    session.rollback()
                    if is_unique_violation(e):
                        logger.warning("Duplicate email skipped: {}", user.email)
                        report.results.append(SaveResult(user, SaveOutcome.DUPLICATE))
                    else:
                        logger.error("Failed to save {}: {}", user.email, e.orig)
                        report.results.append(
                            SaveResult(user, SaveOutcome.FAILED, str(e.orig))
                        )
                    continue
                except SQLAlchemyError as e:
                    session.rollback()
                    logger.error("Failed to save {}: {}", user.email, e)
                    report.results.append(SaveResult(user, SaveOutcome.FAILED, str(e)))
                    continue

                logger.info("Saved {} (id {})", stored.full_name, stored.id)
                report.results.append(SaveResult(stored, SaveOutcome.SAVED))

        logger.info("Saved {} users", report)
        return report

    def list_all(self) -> list[User]:
        """All stored users ordered by id; an empty table yields an empty list."""
        try:
            with self._db.session_scope() as session:
                return UserRepository(session).list_all()
        except SQLAlchemyError as e:
            raise StorageError("listing users", e) from e

    def count(self) -> int:
        try:
            with self._db.session_scope() as session:
                return UserRepository(session).count()
        except SQLAlchemyError as e:
            raise StorageError("counting users", e) from e
