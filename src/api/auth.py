"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user, get_user_client
from src.models.user import User
from src.schemas.auth import AuthResponse, EmailAvailability, EmailCheck, UserLogin
from src.schemas.user import UserResponse
from src.services.auth import authenticate_user, create_access_token
from src.services.user_client import UserClient

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Login with email and password."""
    found = await users.select_by_email_with_secret(credentials.email)
    user = authenticate_user(found, credentials.email, credentials.password)

    access_token = create_access_token(user.id, user.role_id)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login/token", response_model=AuthResponse)
async def login_with_token(
    current_user: Annotated[User, Depends(get_current_user)],
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Exchange a valid token for a fresh one and the current user."""
    user = await users.select(current_user.id)
    access_token = create_access_token(user.id, user.role_id)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/email", response_model=EmailAvailability)
async def check_email(
    body: EmailCheck,
    users: Annotated[UserClient, Depends(get_user_client)],
):
    """Check whether an email is still free for signup."""
    return EmailAvailability(available=not await users.email_exists(body.email))
