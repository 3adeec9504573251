"""Comment API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import (
    comment_owner,
    get_comment_client,
    get_current_user,
    user_has_access,
)
from src.models.user import User
from src.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from src.services.comment_client import CommentClient

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse])
async def get_comments(
    current_user: Annotated[User, Depends(get_current_user)],
    comments: Annotated[CommentClient, Depends(get_comment_client)],
):
    """Get all comments."""
    return await comments.all()


@router.get("/{id}", response_model=CommentResponse)
async def get_comment(
    id: int,
    current_user: Annotated[User, Depends(get_current_user)],
    comments: Annotated[CommentClient, Depends(get_comment_client)],
):
    """Get a specific comment."""
    return await comments.select(id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    comments: Annotated[CommentClient, Depends(get_comment_client)],
):
    """Comment on an idea as the caller."""
    return await comments.create({**comment_data.model_dump(), "user_id": current_user.id})


@router.put("/{id}", response_model=CommentResponse)
async def update_comment(
    id: int,
    comment_data: CommentUpdate,
    current_user: Annotated[User, Depends(user_has_access(comment_owner))],
    comments: Annotated[CommentClient, Depends(get_comment_client)],
):
    """Edit a comment (owner or admin)."""
    return await comments.update(id, comment_data.model_dump())


@router.delete("/{id}", response_model=CommentResponse)
async def delete_comment(
    id: int,
    current_user: Annotated[User, Depends(user_has_access(comment_owner))],
    comments: Annotated[CommentClient, Depends(get_comment_client)],
):
    """Delete a comment (owner or admin)."""
    return await comments.remove(id)
