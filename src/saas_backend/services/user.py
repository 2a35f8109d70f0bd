"""User business logic.

Normalizes emails, hashes passwords and turns "no row" into NotFoundError.
The request schema has already checked the email address. Persistence
failures arrive here already classified by the repository.
"""

import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession

from saas_backend.exceptions import BadRequestError, NotFoundError
from saas_backend.models import User
from saas_backend.repositories import user as user_repo
from saas_backend.schemas.pagination import Paginated
from saas_backend.schemas.user import UserCreate, UserUpdate


def hash_password(password: str) -> str:
    # bcrypt rejects secrets longer than 72 bytes
    return bcrypt.hashpw(password.encode()[:72], bcrypt.gensalt()).decode()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user(db: AsyncSession, user_id: str) -> User:
    user = await user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError.for_entity("User", user_id)
    return user


async def get_users(db: AsyncSession, skip: int, limit: int) -> Paginated[User]:
    items = await user_repo.list_users(db, skip, limit)
    total = await user_repo.count_users(db)
    return Paginated(items=items, total=total, skip=skip, limit=limit)


async def create_user(db: AsyncSession, data: UserCreate) -> User:
    """Create a user.

    Raises:
        ConflictError: If the email is already registered.
    """
    email = _normalize_email(data.email)
    return await user_repo.create_user(
        db,
        email=email,
        name=data.name.strip(),
        password_hash=hash_password(data.password),
    )


async def update_user(db: AsyncSession, user_id: str, data: UserUpdate) -> User:
    """Apply a partial update.

    Raises:
        BadRequestError: If the payload sets no field.
        NotFoundError: If the user doesn't exist.
        ConflictError: If the new email belongs to another user.
    """
    if data.email is None and data.name is None and data.is_active is None:
        raise BadRequestError("Update must set at least one of: email, name, is_active")

    user = await get_user(db, user_id)
    email = _normalize_email(data.email) if data.email is not None else None
    return await user_repo.update_user(
        db,
        user,
        email=email,
        name=data.name.strip() if data.name is not None else None,
        is_active=data.is_active,
    )


async def delete_user(db: AsyncSession, user_id: str) -> None:
    user = await get_user(db, user_id)
    await user_repo.delete_user(db, user)
