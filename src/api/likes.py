"""Like API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_like_client, like_owner, user_has_access
from src.models.user import User
from src.schemas.like import IdeaLikesResponse, LikeCreate, LikeResponse
from src.services.like_client import LikeClient

router = APIRouter(prefix="/api/v1/likes", tags=["likes"])


@router.get("", response_model=list[LikeResponse])
async def get_likes(
    current_user: Annotated[User, Depends(get_current_user)],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Get all likes."""
    return await likes.all()


@router.get("/idea/{idea_id}", response_model=IdeaLikesResponse)
async def get_idea_likes(
    idea_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Get the likes on one idea."""
    return await likes.for_idea(idea_id)


@router.post(
    "/idea/{idea_id}", response_model=LikeResponse, status_code=status.HTTP_201_CREATED
)
async def like_idea(
    idea_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Like an idea as the caller."""
    return await likes.create_for_idea(idea_id, current_user.id)


@router.delete("/idea/{idea_id}", response_model=LikeResponse)
async def unlike_idea(
    idea_id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Take back the caller's like on an idea."""
    return await likes.remove_from_idea(idea_id, current_user.id)


@router.get("/{id}", response_model=LikeResponse)
async def get_like(
    id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Get a specific like."""
    return await likes.select(id)


@router.post("", response_model=LikeResponse, status_code=status.HTTP_201_CREATED)
async def create_like(
    like_data: LikeCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Like an idea as the caller."""
    return await likes.create({"idea_id": like_data.idea_id, "user_id": current_user.id})


@router.delete("/{id}", response_model=LikeResponse)
async def delete_like(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(like_owner))],
    likes: Annotated[LikeClient, Depends(get_like_client)],
):
    """Delete a like (owner or admin)."""
    return await likes.remove(id)
