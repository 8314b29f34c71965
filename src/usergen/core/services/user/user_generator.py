"""Synthetic user generation."""

import calendar
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta

from loguru import logger

from usergen.entities.user import User

from .names import (
    FIRST_NAMES_FEMALE,
    FIRST_NAMES_MALE,
    LAST_NAMES,
    feminize,
    transliterate,
)

MIN_AGE = 14
MAX_AGE = 80
ATTEMPTS_FACTOR = 3

EMAIL_DOMAINS: tuple[str, ...] = ("gmail.com", "mail.ru", "yandex.ru", "yahoo.com")


@dataclass(frozen=True)
class UserRejected:
    """A generated candidate that failed validation."""

    user: User
    reason: str


@dataclass
class GenerationReport:
    """Outcome of a batch generation run."""

    requested: int
    users: list[User] = field(default_factory=list)
    rejected: list[UserRejected] = field(default_factory=list)
    attempts: int = 0

    @property
    def complete(self) -> bool:
        return len(self.users) >= self.requested


def shift_months(value: date, months: int) -> date:
    """Move ``value`` by ``months`` calendar months, clamping to the month end."""
    total = value.year * 12 + (value.month - 1) + months
    year, month = divmod(total, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class UserGenerator:
    """Produces synthetic users from static name pools.

    Args:
        rng: Source of randomness; seed it for reproducible output.
        today: Clock returning the current date.
        min_age: Youngest accepted age; also the lower bound of the sampled age.
        max_age: Exclusive upper bound of the sampled age.
        attempts_factor: Attempts allowed per requested user in a batch.
    """

    def __init__(
        self,
        rng: random.Random,
        today: Callable[[], date] = date.today,
        min_age: int = MIN_AGE,
        max_age: int = MAX_AGE,
        attempts_factor: int = ATTEMPTS_FACTOR,
    ) -> None:
        self._rng = rng
        self._today = today
        self.min_age = min_age
        self.max_age = max_age
        self.attempts_factor = attempts_factor

    def _birth_date(self, today: date) -> date:
        years = self._rng.randrange(self.min_age, self.max_age)
        months = self._rng.randrange(12)
        days = self._rng.randrange(1, 28)
        shifted = shift_months(shift_months(today, -12 * years), -months)
        return shifted - timedelta(days=days)

    def _email(self, first_name: str, last_name: str) -> str:
        domain = self._rng.choice(EMAIL_DOMAINS)

        first = transliterate(first_name)
        last = transliterate(last_name)
        formats = (
            f"{first}.{last}",
            f"{first}_{last}",
            f"{transliterate(first_name[0])}.{last}",
            f"{last}.{first}",
        )

        local = self._rng.choice(formats)
        return f"{local}{self._rng.randrange(100)}@{domain}"

    def _phone(self) -> str:
        code = self._rng.randrange(900, 999)
        prefix = self._rng.randrange(100, 999)
        part1 = self._rng.randrange(10, 99)
        part2 = self._rng.randrange(10, 99)
        return f"+7 {code} {prefix}-{part1}-{part2}"

    def generate_one(self) -> User | UserRejected:
        """Generate a single candidate, or a rejection when it is too young."""
        today = self._today()
        is_male = self._rng.randrange(2) == 0

        if is_male:
            first_name = self._rng.choice(FIRST_NAMES_MALE)
            last_name = self._rng.choice(LAST_NAMES)
        else:
            first_name = self._rng.choice(FIRST_NAMES_FEMALE)
            last_name = feminize(self._rng.choice(LAST_NAMES))

        birth_date = self._birth_date(today)

        user = User(
            first_name=first_name,
            last_name=last_name,
            email=self._email(first_name, last_name),
            birth_date=birth_date,
            phone=self._phone(),
        )

        age = user.age_at(today)
        if age < self.min_age:
            return UserRejected(
                user=user,
                reason=f"{user.full_name} is too young: {age} years",
            )

        return user

    def generate_batch(self, count: int) -> GenerationReport:
        """Generate up to ``count`` valid users within ``attempts_factor * count`` attempts.

        Fewer users than requested is a degraded outcome, not an error; the
        report carries whatever was collected.
        """
        report = GenerationReport(requested=count)
        max_attempts = count * self.attempts_factor

        logger.info("Generating {} users...", count)

        while len(report.users) < count and report.attempts < max_attempts:
            report.attempts += 1
            result = self.generate_one()

            if isinstance(result, UserRejected):
                report.rejected.append(result)
                logger.warning("Rejected candidate: {}", result.reason)
                continue

            report.users.append(result)
            logger.info(
                "Generated {}, age {}", result.full_name, result.age_at(self._today())
            )

        logger.info(
            "Generated {}/{} users in {} attempts",
            len(report.users),
            count,
            report.attempts,
        )
        return report
