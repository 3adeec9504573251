"""SQLAlchemy models."""

from src.models.comment import Comment
from src.models.idea import Idea, IdeaTag
from src.models.like import Like
from src.models.role import Role
from src.models.tag import Tag, TagUser
from src.models.user import User

__all__ = [
    "Role",
    "User",
    "Tag",
    "TagUser",
    "Idea",
    "IdeaTag",
    "Comment",
    "Like",
]
