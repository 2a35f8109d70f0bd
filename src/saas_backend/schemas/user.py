"""User request and response schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from saas_backend.schemas.pagination import PaginatedResponse


class UserCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)


class UserUpdate(BaseModel):
    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    is_active: bool | None = None


class UserResponse(BaseModel):
    """A user as returned by the API. Never includes the password hash."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    email: str
    name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


UserListResponse = PaginatedResponse[UserResponse]
