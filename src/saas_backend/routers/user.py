"""User endpoints."""

from fastapi import APIRouter, Response

from saas_backend.dependencies import DB, Limit, Skip
from saas_backend.schemas.user import UserCreate, UserListResponse, UserResponse, UserUpdate
from saas_backend.services import user as user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(db: DB, payload: UserCreate) -> UserResponse:
    user = await user_service.create_user(db, payload)
    return UserResponse.model_validate(user)


@router.get("", response_model=UserListResponse, status_code=200)
async def list_users(db: DB, skip: Skip = 0, limit: Limit = 20) -> UserListResponse:
    """List users, oldest first."""
    result = await user_service.get_users(db, skip, limit)
    return UserListResponse.model_validate(result)


# user_id stays a plain string: an id that isn't a UUID is simply a user that
# doesn't exist, and gets the same 404 as any other unknown id.
@router.get("/{user_id}", response_model=UserResponse)
async def get_user(db: DB, user_id: str) -> UserResponse:
    user = await user_service.get_user(db, user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(db: DB, user_id: str, payload: UserUpdate) -> UserResponse:
    user = await user_service.update_user(db, user_id, payload)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=204)
async def delete_user(db: DB, user_id: str) -> Response:
    await user_service.delete_user(db, user_id)
    return Response(status_code=204)
