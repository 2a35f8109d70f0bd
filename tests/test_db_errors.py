"""Tests for classifying persistence failures."""

import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from saas_backend.db.errors import classify_database_error, database_errors
from saas_backend.exceptions import ConflictError, DatabaseError
from tests.factories import make_user


class FakeDriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def test_unique_violation_by_sqlstate_is_conflict() -> None:
    exc = IntegrityError("INSERT ...", {}, FakeDriverError("dup", sqlstate="23505"))
    error = classify_database_error(exc)
    assert isinstance(error, ConflictError)
    assert error.message == "Duplicate entry"


def test_unique_violation_uses_conflict_message() -> None:
    exc = IntegrityError("INSERT ...", {}, FakeDriverError("UNIQUE constraint failed: users.email"))
    error = classify_database_error(exc, "User with email a@b.co already exists")
    assert isinstance(error, ConflictError)
    assert error.message == "User with email a@b.co already exists"


def test_other_integrity_error_is_database_error() -> None:
    exc = IntegrityError("INSERT ...", {}, FakeDriverError("NOT NULL constraint failed", "23502"))
    error = classify_database_error(exc)
    assert isinstance(error, DatabaseError)
    assert error.message == "NOT NULL constraint failed"


def test_operational_error_is_database_error() -> None:
    exc = OperationalError("SELECT 1", {}, FakeDriverError("connection refused"))
    error = classify_database_error(exc)
    assert isinstance(error, DatabaseError)
    assert error.message == "connection refused"


def test_non_dbapi_error_is_database_error() -> None:
    error = classify_database_error(NoResultFound("No row was found"))
    assert isinstance(error, DatabaseError)
    assert "No row was found" in error.message


def test_database_errors_keeps_original_as_cause() -> None:
    original = OperationalError("SELECT 1", {}, FakeDriverError("timeout"))
    with pytest.raises(DatabaseError) as excinfo:
        with database_errors():
            raise original
    assert excinfo.value.__cause__ is original


def test_database_errors_ignores_other_exceptions() -> None:
    with pytest.raises(KeyError):
        with database_errors():
            raise KeyError("not ours")


@pytest.mark.asyncio
async def test_real_unique_violation_becomes_conflict(db: AsyncSession) -> None:
    db.add(make_user(email="dup@example.com"))
    await db.flush()

    db.add(make_user(email="dup@example.com"))
    with pytest.raises(ConflictError):
        with database_errors():
            await db.flush()
    await db.rollback()
