"""Idea API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user, get_idea_client, idea_owner, user_has_access
from src.models.user import User
from src.schemas.idea import (
    MAX_PAGE_NUM,
    TAG_IDS_PATTERN,
    IdeaCreate,
    IdeaResponse,
    IdeaSort,
    IdeaUpdate,
    parse_tag_ids,
)
from src.services.idea_client import IdeaClient

router = APIRouter(prefix="/api/v1/ideas", tags=["ideas"])


@router.get("", response_model=list[IdeaResponse])
async def get_ideas(
    current_user: Annotated[User, Depends(get_current_user)],
    ideas: Annotated[IdeaClient, Depends(get_idea_client)],
    page_num: Annotated[int, Query(ge=0, le=MAX_PAGE_NUM)] = 0,
    tags: Annotated[
        str | None,
        Query(pattern=TAG_IDS_PATTERN, description="Tag ids separated by commas"),
    ] = None,
    sort: IdeaSort | None = None,
    order: str = "desc",
):
    """List ideas, one page at a time."""
    return await ideas.all(
        page=page_num,
        tag_ids=parse_tag_ids(tags),
        sort=sort.value if sort else None,
        order=order,
    )


@router.get("/{id}", response_model=IdeaResponse)
async def get_idea(
    id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    ideas: Annotated[IdeaClient, Depends(get_idea_client)],
):
    """Get a specific idea."""
    return await ideas.select(id)


@router.post("", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
async def create_idea(
    idea_data: IdeaCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    ideas: Annotated[IdeaClient, Depends(get_idea_client)],
):
    """Create a new idea owned by the caller."""
    return await ideas.create(idea_data.model_dump(), current_user)


@router.put("/{id}", response_model=IdeaResponse)
async def update_idea(
    id: int,
    idea_data: IdeaUpdate,
    current_user: Annotated[User, Depends(user_has_access(idea_owner))],
    ideas: Annotated[IdeaClient, Depends(get_idea_client)],
):
    """Update an idea (owner or admin)."""
    return await ideas.update(idea_data.model_dump(), id)


@router.delete("/{id}", response_model=IdeaResponse)
async def delete_idea(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(idea_owner))],
    ideas: Annotated[IdeaClient, Depends(get_idea_client)],
):
    """Delete an idea (owner or admin)."""
    return await ideas.remove(id)
