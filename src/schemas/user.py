"""User schemas."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    PositiveInt,
    StringConstraints,
    field_validator,
)

from src.schemas.role import RoleResponse
from src.services.auth import is_strong_password

NAME_PATTERN = re.compile(r"^[a-zA-ZäöüÄÖÜß ,.'-]+$")

UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=20)]


def _check_name(v: str | None) -> str | None:
    if v is not None and not NAME_PATTERN.match(v):
        raise ValueError("must not contain special characters")
    return v


def _check_password(v: str | None) -> str | None:
    if v is not None and not is_strong_password(v):
        raise ValueError(
            "must be at least 8 characters long, contain an uppercase letter and a digit"
            " and no NUL characters"
        )
    return v


class UserCreate(BaseModel):
    """Sign up a new user."""

    name: UserName
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    role_id: PositiveInt

    @field_validator("name")
    @classmethod
    def name_has_no_special_characters(cls, v: str | None) -> str | None:
        return _check_name(v)

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, v: str | None) -> str | None:
        return _check_password(v)


class UserUpdate(BaseModel):
    """Update a user. Only the fields sent are changed."""

    name: UserName | None = None
    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    role_id: PositiveInt | None = None

    @field_validator("name")
    @classmethod
    def name_has_no_special_characters(cls, v: str | None) -> str | None:
        return _check_name(v)

    @field_validator("password")
    @classmethod
    def password_is_strong(cls, v: str | None) -> str | None:
        return _check_password(v)


class UserIdea(BaseModel):
    """Idea as listed on a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    created_at: datetime


class UserComment(BaseModel):
    """Comment as listed on a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    idea_id: int
    updated_at: datetime


class UserLike(BaseModel):
    """Like as listed on a user."""

    model_config = ConfigDict(from_attributes=True)

    idea_id: int


class UserResponse(BaseModel):
    """Public user shape. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    profile_img: str
    role_id: int
    role: RoleResponse
    ideas: list[UserIdea] = []
    comments: list[UserComment] = []
    likes: list[UserLike] = []
    created_at: datetime
    updated_at: datetime
