"""Role schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator

from src.schemas.common import UserSummary, capitalize

RoleName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]


class RoleCreate(BaseModel):
    """Create a role."""

    name: RoleName

    @field_validator("name")
    @classmethod
    def capitalize_name(cls, v: str) -> str:
        return capitalize(v)


class RoleUpdate(RoleCreate):
    """Update a role."""


class RoleResponse(BaseModel):
    """Role response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class RoleWithUsersResponse(RoleResponse):
    """Role response including the users holding it."""

    users: list[UserSummary] = []
