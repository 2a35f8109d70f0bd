"""Generic pagination types shared by all list endpoints.

PaginatedResponse[T]: Pydantic model for HTTP responses (serializable).
Paginated[T]:         plain dataclass for service-layer returns (not serializable).
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Pydantic model for paginated HTTP responses.

    ``from_attributes`` is set so ``model_validate`` can read a ``Paginated``
    dataclass directly::

        # schemas/user.py
        UserListResponse = PaginatedResponse[UserResponse]

    Use this in routers only; services and repositories stay Pydantic-free.
    """

    model_config = {"from_attributes": True}

    items: list[T]
    total: int
    skip: int
    limit: int


@dataclass
class Paginated(Generic[T]):
    """Paginated results inside the service layer.

    The router converts it for the response::

        result = await get_users(db, skip, limit)
        return UserListResponse.model_validate(result)
    """

    items: list[T]
    total: int
    skip: int
    limit: int
