"""Idea models."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Idea(Base, TimestampMixin):
    """User-submitted idea."""

    __tablename__ = "ideas"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    user = relationship("User", back_populates="ideas")
    tag_links = relationship(
        "IdeaTag",
        back_populates="idea",
        cascade="all, delete-orphan",
        order_by="IdeaTag.tag_id",
    )
    comments = relationship(
        "Comment",
        back_populates="idea",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    likes = relationship("Like", back_populates="idea", cascade="all, delete-orphan")

    @property
    def tags(self) -> list:
        """Tags attached to this idea."""
        return [link.tag for link in self.tag_links]


class IdeaTag(Base):
    """Join row between an idea and a tag."""

    __tablename__ = "idea_tags"

    idea_id = Column(Integer, ForeignKey("ideas.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    # Relationships
    idea = relationship("Idea", back_populates="tag_links")
    tag = relationship("Tag", back_populates="idea_links")
