"""User data-access layer.

Pure query functions: no business logic, no HTTP concerns.
Each function takes a session and returns models or scalars. SQLAlchemy
failures leave this module as ConflictError or DatabaseError.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from saas_backend.db.errors import database_errors
from saas_backend.models import User


def _parse_id(user_id: str) -> uuid.UUID | None:
    try:
        return uuid.UUID(user_id)
    except ValueError:
        return None


async def list_users(db: AsyncSession, skip: int, limit: int) -> list[User]:
    """Return a page of users, oldest first."""
    stmt = select(User).order_by(User.created_at, User.id).offset(skip).limit(limit)
    with database_errors():
        result = await db.execute(stmt)
    return list(result.scalars().all())


async def count_users(db: AsyncSession) -> int:
    stmt = select(func.count(User.id))
    with database_errors():
        result = await db.execute(stmt)
    return result.scalar_one()


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    """Return the user, or None when the id is unknown or not a UUID."""
    parsed = _parse_id(user_id)
    if parsed is None:
        return None
    with database_errors():
        return await db.get(User, parsed)


async def create_user(db: AsyncSession, *, email: str, name: str, password_hash: str) -> User:
    now = datetime.now(UTC)
    user = User(
        id=uuid.uuid4(),
        email=email,
        name=name,
        password_hash=password_hash,
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    with database_errors(conflict_message=f"User with email {email} already exists"):
        await db.flush()
    return user


async def update_user(
    db: AsyncSession,
    user: User,
    *,
    email: str | None = None,
    name: str | None = None,
    is_active: bool | None = None,
) -> User:
    """Apply the non-None fields to ``user`` and flush."""
    if email is not None:
        user.email = email
    if name is not None:
        user.name = name
    if is_active is not None:
        user.is_active = is_active
    user.updated_at = datetime.now(UTC)
    with database_errors(conflict_message=f"User with email {email} already exists"):
        await db.flush()
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    with database_errors():
        await db.delete(user)
        await db.flush()
