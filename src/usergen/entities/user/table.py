"""User database table model."""

from sqlalchemy import Column, Integer, String
from sqlmodel import Field, SQLModel


class UserTable(SQLModel, table=True):
    """Database persistence model for the ``Users`` table.

    Column names keep the PascalCase layout of the persisted table while the
    attributes stay snake_case. ``birth_date`` is stored as ISO ``yyyy-MM-dd``
    text; the repository converts to and from ``date``.
    """

    __tablename__ = "Users"  # type: ignore[assignment]
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(
        default=None,
        sa_column=Column("Id", Integer, primary_key=True, autoincrement=True),
    )
    first_name: str = Field(sa_column=Column("FirstName", String, nullable=False))
    last_name: str = Field(sa_column=Column("LastName", String, nullable=False))
    email: str = Field(
        sa_column=Column("Email", String, nullable=False, unique=True)
    )
    birth_date: str = Field(sa_column=Column("BirthDate", String, nullable=False))
    phone: str | None = Field(default=None, sa_column=Column("Phone", String, nullable=True))
    age: int = Field(sa_column=Column("Age", Integer, nullable=False))
