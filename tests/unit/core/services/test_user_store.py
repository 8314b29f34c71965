"""Tests for the user store against a file-backed SQLite database."""

import sqlite3
from datetime import date

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from usergen.core.exceptions import StorageError
from usergen.core.services.database import DbSessionService
from usergen.core.services.user import SaveOutcome, SaveReport, SaveResult, UserStore
from usergen.core.services.user.user_store import is_unique_violation
from usergen.entities.user import User, age_on
from usergen.runtime.config.config_data import DatabaseConfig


class TestInitSchema:
    def test_creates_users_table(self, store, db):
        assert "Users" in inspect(db.engine).get_table_names()

    def test_idempotent(self, store, make_user):
        store.save_all([make_user()])

        store.init_schema()
        store.init_schema()

        assert store.count() == 1
        assert store.list_all()[0].email == "ivan.petrov5@gmail.com"

    def test_unreachable_database(self, tmp_path):
        config = DatabaseConfig(url=f"sqlite:///{tmp_path / 'missing' / 'users.db'}")
        store = UserStore(DbSessionService(config))

        with pytest.raises(StorageError) as exc_info:
            store.init_schema()

        assert exc_info.value.operation == "schema initialization"


class TestSaveAll:
    def test_saves_generated_batch(self, store, generator):
        users = generator.generate_batch(10).users

        report = store.save_all(users)

        assert report.saved == 10
        assert report.total == 10
        assert str(report) == "10/10"
        assert store.count() == 10

    def test_saved_results_carry_ids(self, store, make_user):
        report = store.save_all(
            [make_user(), make_user(email="anna.petrova1@mail.ru", first_name="Анна")]
        )

        assert [r.outcome for r in report.results] == [SaveOutcome.SAVED] * 2
        assert [r.user.id for r in report.results] == [1, 2]

    def test_duplicate_email_is_skipped(self, store, make_user):
        first = store.save_all([make_user()])
        second = store.save_all(
            [make_user(first_name="Игорь", last_name="Волков", phone=None)]
        )

        assert first.saved == 1
        assert second.saved == 0
        assert second.skipped == 1
        assert second.results[0].outcome is SaveOutcome.DUPLICATE
        assert str(second) == "0/1"
        assert store.count() == 1
        assert store.list_all()[0].first_name == "Иван"

    def test_duplicate_within_batch_does_not_stop_the_rest(self, store, make_user):
        report = store.save_all(
            [
                make_user(),
                make_user(first_name="Олег"),
                make_user(email="oleg.orlov3@yahoo.com", first_name="Олег"),
            ]
        )

        assert [r.outcome for r in report.results] == [
            SaveOutcome.SAVED,
            SaveOutcome.DUPLICATE,
            SaveOutcome.SAVED,
        ]
        assert str(report) == "2/3"
        assert [u.id for u in store.list_all()] == [1, 2]

    def test_other_integrity_errors_are_failures(self, store, make_user):
        broken = User.model_construct(
            first_name=None,
            last_name="Петров",
            email="broken1@mail.ru",
            birth_date=date(1990, 1, 1),
            phone=None,
            id=None,
            age=None,
        )

        report = store.save_all([broken, make_user()])

        assert report.results[0].outcome is SaveOutcome.FAILED
        assert "NOT NULL" in report.results[0].detail
        assert report.results[1].outcome is SaveOutcome.SAVED
        assert report.failed == 1
        assert store.count() == 1

    def test_empty_batch(self, store):
        report = store.save_all([])

        assert report.total == 0
        assert str(report) == "0/0"


class TestListAll:
    def test_empty_table(self, store):
        assert store.list_all() == []

    def test_round_trip(self, store, make_user, today):
        user = make_user(birth_date=date(2001, 12, 31), phone=None)
        store.save_all([user])

        (stored,) = store.list_all()

        assert stored.id == 1
        assert stored.first_name == user.first_name
        assert stored.last_name == user.last_name
        assert stored.email == user.email
        assert stored.phone is None
        assert stored.birth_date == date(2001, 12, 31)
        assert stored.age == age_on(user.birth_date, today) == 24

    def test_ordered_by_id(self, store, generator):
        store.save_all(generator.generate_batch(5).users)
        store.save_all(generator.generate_batch(5).users)

        ids = [u.id for u in store.list_all()]

        assert ids == sorted(ids)
        assert len(ids) == 10

    def test_emails_unique(self, store, generator):
        users = generator.generate_batch(10).users
        store.save_all(users)
        store.save_all(users)

        emails = [u.email for u in store.list_all()]

        assert len(emails) == len(set(emails)) == 10


class TestSaveReport:
    def test_counts(self, make_user):
        user = make_user()
        report = SaveReport(
            results=[
                SaveResult(user, SaveOutcome.SAVED),
                SaveResult(user, SaveOutcome.DUPLICATE),
                SaveResult(user, SaveOutcome.FAILED, "boom"),
            ]
        )

        assert (report.saved, report.skipped, report.failed, report.total) == (1, 1, 1, 3)
        assert str(report) == "1/3"


class TestIsUniqueViolation:
    def _error(self, orig):
        return IntegrityError("INSERT", {}, orig)

    def test_sqlite_message(self):
        orig = sqlite3.IntegrityError("UNIQUE constraint failed: Users.Email")

        assert is_unique_violation(self._error(orig))

    def test_not_null_is_not_unique(self):
        orig = sqlite3.IntegrityError("NOT NULL constraint failed: Users.FirstName")

        assert not is_unique_violation(self._error(orig))

    def test_postgres_code(self):
        class PgError(Exception):
            pgcode = "23505"

        assert is_unique_violation(self._error(PgError("duplicate key")))
