"""Tag API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    admin_only,
    get_current_user,
    get_tag_client,
    user_has_access,
    user_self,
)
from src.exceptions import BadRequest
from src.models.user import User
from src.schemas.tag import TagCreate, TagResponse, TagUpdate, TagWithUsersResponse
from src.services.tag_client import TagClient

router = APIRouter(prefix="/api/v1/tags", tags=["tags"])


@router.get("", response_model=None)
async def get_tags(
    tags: Annotated[TagClient, Depends(get_tag_client)],
    usr: bool = False,
) -> list[TagWithUsersResponse] | list[TagResponse]:
    """Get all tags, with their subscribers when ``usr`` is set."""
    if usr:
        return [TagWithUsersResponse.model_validate(t) for t in await tags.all_with_users()]
    return [TagResponse.model_validate(t) for t in await tags.all()]


@router.get("/{id}", response_model=None)
async def get_tag(
    id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    tags: Annotated[TagClient, Depends(get_tag_client)],
    usr: bool = False,
) -> TagWithUsersResponse | TagResponse:
    """Get a specific tag."""
    if usr:
        return TagWithUsersResponse.model_validate(await tags.select_with_users(id))
    return TagResponse.model_validate(await tags.select(id))


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreate,
    current_user: Annotated[User, Depends(user_has_access(admin_only))],
    tags: Annotated[TagClient, Depends(get_tag_client)],
):
    """Create a tag (admin only)."""
    if not await tags.tag_is_free(tag_data.name):
        raise BadRequest("Tag with that name already exists")
    return await tags.create(tag_data.model_dump())


@router.put("/{id}", response_model=TagResponse)
async def update_tag(
    id: int,
    tag_data: TagUpdate,
    current_user: Annotated[User, Depends(user_has_access(admin_only))],
    tags: Annotated[TagClient, Depends(get_tag_client)],
):
    """Update a tag (admin only)."""
    return await tags.update(id, tag_data.model_dump())


@router.delete("/{id}", response_model=TagResponse)
async def delete_tag(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(admin_only))],
    tags: Annotated[TagClient, Depends(get_tag_client)],
):
    """Delete a tag (admin only)."""
    return await tags.remove(id)


@router.post(
    "/{tag_id}/users/{user_id}",
    response_model=TagWithUsersResponse,
    status_code=status.HTTP_201_CREATED,
)
async def subscribe(
    tag_id: int,
    user_id: int,
    current_user: Annotated[User, Depends(user_has_access(user_self, id_param="user_id"))],
    tags: Annotated[TagClient, Depends(get_tag_client)],
):
    """Subscribe a user to a tag (self or admin)."""
    return await tags.add_user_to_tag(tag_id, user_id)


@router.delete("/{tag_id}/users/{user_id}", response_model=TagWithUsersResponse)
async def unsubscribe(
    tag_id: int,
    user_id: int,
    current_user: Annotated[User, Depends(user_has_access(user_self, id_param="user_id"))],
    tags: Annotated[TagClient, Depends(get_tag_client)],
):
    """Unsubscribe a user from a tag (self or admin)."""
    return await tags.remove_user_from_tag(tag_id, user_id)
