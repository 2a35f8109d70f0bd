"""Classify SQLAlchemy failures into application errors.

Repositories wrap ORM calls in ``database_errors()`` so that services and the
request boundary only ever see ``ConflictError`` or ``DatabaseError``, never a
raw driver exception.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from saas_backend.exceptions import AppError, ConflictError, DatabaseError

UNIQUE_VIOLATION = "23505"

# Driver messages for unique violations where no SQLSTATE is exposed (SQLite).
_UNIQUE_MARKERS = ("UNIQUE constraint failed", "duplicate key value violates unique constraint")


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == UNIQUE_VIOLATION:
        return True
    text = str(orig)
    return any(marker in text for marker in _UNIQUE_MARKERS)


def classify_database_error(exc: SQLAlchemyError, conflict_message: str | None = None) -> AppError:
    """Map a SQLAlchemy exception to ConflictError or DatabaseError."""
    if isinstance(exc, IntegrityError) and is_unique_violation(exc):
        return ConflictError(conflict_message or "Duplicate entry")
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return DatabaseError(str(exc.orig))
    return DatabaseError(str(exc))


@contextmanager
def database_errors(conflict_message: str | None = None) -> Iterator[None]:
    """Re-raise SQLAlchemy errors from the block as application errors.

    Usage:
        with database_errors(conflict_message=f"User with email {email} already exists"):
            await db.flush()
    """
    try:
        yield
    except SQLAlchemyError as exc:
        raise classify_database_error(exc, conflict_message) from exc
