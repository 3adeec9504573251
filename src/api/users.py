"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status

from src.api.dependencies import (
    get_avatar_storage,
    get_current_user,
    get_user_client,
    user_has_access,
    user_self,
)
from src.exceptions import BadRequest
from src.models.user import User
from src.schemas.user import UserCreate, UserResponse, UserUpdate
from src.services.avatar_storage import AvatarStorage
from src.services.user_client import UserClient

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Get all users."""
    return await users.all()


@router.get("/{id}", response_model=UserResponse)
async def get_user(
    id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Get a specific user."""
    return await users.select(id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Sign up a new user."""
    if await users.email_exists(user_data.email):
        raise BadRequest("Email is already in use")

    return await users.create(user_data.model_dump())


@router.put("/{id}", response_model=UserResponse)
async def update_user(
    id: int,
    user_data: UserUpdate,
    current_user: Annotated[User, Depends(user_has_access(user_self))],
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Update a user (self or admin)."""
    if user_data.email is not None and not await users.email_is_same_or_unique(
        user_data.email, id
    ):
        raise BadRequest("Email is already in use")

    return await users.update(user_data.model_dump(exclude_unset=True), id)


@router.delete("/{id}", response_model=UserResponse)
async def delete_user(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(user_self))],
    users: Annotated[UserClient, Depends(get_user_client)],
    storage: Annotated[AvatarStorage, Depends(get_avatar_storage)],
):
    """Delete a user (self or admin) and their stored avatar."""
    user = await users.remove(id)
    storage.remove(user.profile_img)
    return user


@router.put("/{id}/img", response_model=UserResponse)
async def update_avatar(
    id: int,
    avatar: Annotated[UploadFile, File(description="Avatar image (PNG or JPEG)")],
    current_user: Annotated[User, Depends(user_has_access(user_self))],
    users: Annotated[UserClient, Depends(get_user_client)],
    storage: Annotated[AvatarStorage, Depends(get_avatar_storage)],
):
    """Replace a user's avatar."""
    filename = await storage.save(avatar)
    try:
        return await users.update_avatar(id, filename)
    except Exception:
        storage.remove(filename)
        raise


@router.delete("/{id}/img", response_model=UserResponse)
async def delete_avatar(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(user_self))],
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Remove a user's avatar."""
    return await users.remove_avatar(id)
