"""Tag schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

from src.schemas.common import UserSummary

TagName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
TagDescription = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)
]


class TagCreate(BaseModel):
    """Create a tag."""

    name: TagName
    description: TagDescription | None = None


class TagUpdate(BaseModel):
    """Update a tag."""

    name: TagName
    description: TagDescription | None = None


class TagSummary(BaseModel):
    """Tag reference embedded in ideas."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class TagResponse(TagSummary):
    """Tag response."""

    description: str


class TagWithUsersResponse(TagResponse):
    """Tag response including subscribed users."""

    users: list[UserSummary] = []
