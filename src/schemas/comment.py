"""Comment schemas."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PositiveInt, StringConstraints, field_validator

from src.schemas.common import UserSummary, capitalize

CommentContent = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)
]


class CommentUpdate(BaseModel):
    """Update a comment."""

    content: CommentContent

    @field_validator("content")
    @classmethod
    def capitalize_content(cls, v: str) -> str:
        return capitalize(v)


class CommentCreate(CommentUpdate):
    """Comment on an idea."""

    idea_id: PositiveInt


class CommentResponse(BaseModel):
    """Comment response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    idea_id: int
    user: UserSummary
    created_at: datetime
    updated_at: datetime
