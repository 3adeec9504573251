"""Like schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, PositiveInt

from src.schemas.common import UserSummary


class LikeCreate(BaseModel):
    """Like an idea."""

    idea_id: PositiveInt


class LikeResponse(BaseModel):
    """Like response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    idea_id: int
    user: UserSummary
    created_at: datetime


class IdeaLikesResponse(BaseModel):
    """All likes on one idea."""

    likes: list[LikeResponse]
    count: int
