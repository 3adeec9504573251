"""Tag models."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Tag(Base, TimestampMixin):
    """Label attachable to ideas and subscribable by users."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    description = Column(String(500), nullable=False, default="")

    # Relationships
    idea_links = relationship("IdeaTag", back_populates="tag", cascade="all, delete-orphan")
    user_links = relationship(
        "TagUser",
        back_populates="tag",
        cascade="all, delete-orphan",
        order_by="TagUser.user_id",
    )

    @property
    def users(self) -> list:
        """Users subscribed to this tag."""
        return [link.user for link in self.user_links]


class TagUser(Base, TimestampMixin):
    """Subscription of a user to a tag. One row per (user, tag) pair."""

    __tablename__ = "tag_users"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    # Relationships
    user = relationship("User", back_populates="tag_links")
    tag = relationship("Tag", back_populates="user_links")
