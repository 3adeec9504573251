"""Idea schemas."""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, StringConstraints

from src.schemas.common import UserSummary
from src.schemas.tag import TagSummary

IdeaTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=40)]
IdeaContent = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=1000)
]

TAG_IDS_PATTERN = r"^[0-9]+(,[0-9]+)*$"
MAX_PAGE_NUM = 1_000_000


class IdeaSort(str, Enum):
    """Sort keys accepted by the idea listing."""

    LIKES = "likes"
    COMMENTS = "comments"
    DATE = "date"


class IdeaCreate(BaseModel):
    """Create a new idea."""

    title: IdeaTitle
    content: IdeaContent
    tags: list[PositiveInt] = Field(..., min_length=1)


class IdeaUpdate(BaseModel):
    """Update an idea. The tag set is replaced, so ``tags`` must be sent."""

    title: IdeaTitle
    content: IdeaContent
    tags: list[PositiveInt] | None = Field(None, min_length=1)


class IdeaComment(BaseModel):
    """Comment as embedded in an idea."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    user: UserSummary
    created_at: datetime


class IdeaLike(BaseModel):
    """Like as embedded in an idea."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int


class IdeaResponse(BaseModel):
    """Idea response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    user: UserSummary
    tags: list[TagSummary]
    comments: list[IdeaComment]
    likes: list[IdeaLike]
    created_at: datetime
    updated_at: datetime


def parse_tag_ids(raw: str | None) -> list[int]:
    """Turn the ``tags`` query value ("1,2,3") into ids."""
    if not raw:
        return []
    return [int(part) for part in raw.split(",")]
