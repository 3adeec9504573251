"""Role API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import admin_only, get_current_user, get_role_client, user_has_access
from src.models.user import User
from src.schemas.role import RoleCreate, RoleResponse, RoleUpdate, RoleWithUsersResponse
from src.services.role_client import RoleClient

router = APIRouter(prefix="/api/v1/roles", tags=["roles"])


@router.get("", response_model=None)
async def get_roles(
    roles: Annotated[RoleClient, Depends(get_role_client)],
    usr: bool = False,
) -> list[RoleWithUsersResponse] | list[RoleResponse]:
    """Get all roles, with their users when ``usr`` is set."""
    if usr:
        return [RoleWithUsersResponse.model_validate(r) for r in await roles.all_with_users()]
    return [RoleResponse.model_validate(r) for r in await roles.all()]


@router.get("/{id}", response_model=None)
async def get_role(
    id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    roles: Annotated[RoleClient, Depends(get_role_client)],
    usr: bool = False,
) -> RoleWithUsersResponse | RoleResponse:
    """Get a specific role."""
    if usr:
        return RoleWithUsersResponse.model_validate(await roles.select_with_users(id))
    return RoleResponse.model_validate(await roles.select(id))


@router.post("", response_model=RoleResponse, status_code=status.HTTP_201_CREATED)
async def create_role(
    role_data: RoleCreate,
    current_user: Annotated[User, Depends(user_has_access(admin_only))],
    roles: Annotated[RoleClient, Depends(get_role_client)],
):
    """Create a role (admin only)."""
    return await roles.create(role_data.model_dump())


@router.put("/{id}", response_model=RoleResponse)
async def update_role(
    id: int,
    role_data: RoleUpdate,
    current_user: Annotated[User, Depends(user_has_access(admin_only))],
    roles: Annotated[RoleClient, Depends(get_role_client)],
):
    """Rename a role (admin only)."""
    return await roles.update(id, role_data.model_dump())


@router.delete("/{id}", response_model=RoleResponse)
async def delete_role(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(admin_only))],
    roles: Annotated[RoleClient, Depends(get_role_client)],
):
    """Delete a role (admin only)."""
    return await roles.remove(id)
