"""Factory functions for creating model instances in tests."""

import uuid
from datetime import UTC, datetime

from saas_backend.models import User


def make_user(
    *,
    email: str = "ada@example.com",
    name: str = "Ada Lovelace",
    password_hash: str = "$2b$12$notarealbcrypthashnotarealbcrypthashnotareal",
    is_active: bool = True,
) -> User:
    now = datetime.now(UTC)
    return User(
        id=uuid.uuid4(),
        email=email,
        name=name,
        password_hash=password_hash,
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )
