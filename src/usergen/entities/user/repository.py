from datetime import date

from sqlalchemy import func
from sqlmodel import Session, select

from .entity import User
from .table import UserTable


class UserRepository:
    """Data-access layer for users.

    The repository flushes but never commits; transaction boundaries belong to
    the caller.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: UserTable) -> User:
        return User(
            id=row.id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            birth_date=date.fromisoformat(row.birth_date),
            phone=row.phone,
            age=row.age,
        )

    def create(self, user: User, age: int) -> User:
        """Insert ``user`` with the given age snapshot and return it with its id.

        Raises ``sqlalchemy.exc.IntegrityError`` when the email already exists.
        """
        row = UserTable(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            birth_date=user.birth_date.isoformat(),
            phone=user.phone,
            age=age,
        )
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def list_all(self) -> list[User]:
        """Every stored user, ordered by surrogate key ascending."""
        statement = select(UserTable).order_by(UserTable.id)
        return [self._to_entity(row) for row in self._session.exec(statement)]

    def count(self) -> int:
        statement = select(func.count()).select_from(UserTable)
        return self._session.exec(statement).one()
