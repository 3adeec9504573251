"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, EmailAvailability, EmailCheck, UserLogin
from src.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from src.schemas.idea import IdeaCreate, IdeaResponse, IdeaSort, IdeaUpdate
from src.schemas.like import IdeaLikesResponse, LikeCreate, LikeResponse
from src.schemas.role import RoleCreate, RoleResponse, RoleUpdate, RoleWithUsersResponse
from src.schemas.tag import TagCreate, TagResponse, TagUpdate, TagWithUsersResponse
from src.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "UserLogin",
    "EmailCheck",
    "EmailAvailability",
    "AuthResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "RoleCreate",
    "RoleUpdate",
    "RoleResponse",
    "RoleWithUsersResponse",
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    "TagWithUsersResponse",
    "IdeaCreate",
    "IdeaUpdate",
    "IdeaResponse",
    "IdeaSort",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "LikeCreate",
    "LikeResponse",
    "IdeaLikesResponse",
]
