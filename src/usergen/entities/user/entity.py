"""User domain entity."""

from datetime import date
from typing import Any

from pydantic import Field

from usergen.entities._base import Entity


def age_on(birth_date: date, today: date) -> int:
    """Return the age in full years reached by ``today``."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


class User(Entity):
    """User entity representing a synthetic person.

    The age is derived from ``birth_date`` against an explicit date, so callers
    control the clock. ``age`` only holds the snapshot read back from storage.
    """

    first_name: str = Field(min_length=1, description="User's first name")
    last_name: str = Field(min_length=1, description="User's last name")
    email: str = Field(min_length=3, description="User's email address")
    birth_date: date = Field(description="User's date of birth")
    phone: str | None = Field(default=None, description="User's phone number")
    age: int | None = Field(default=None, description="Age snapshot as persisted")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def age_at(self, today: date) -> int:
        """Age in full years on ``today``."""
        return age_on(self.birth_date, today)

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring the age snapshot."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.first_name == other.first_name
            and self.last_name == other.last_name
            and self.email == other.email
            and self.birth_date == other.birth_date
            and self.phone == other.phone
        )

    def __hash__(self) -> int:
        return hash((
            self.id,
            self.first_name,
            self.last_name,
            self.email,
            self.birth_date,
            self.phone,
        ))
