"""Like model."""

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Like(Base, TimestampMixin):
    """A user's like on an idea. At most one per (idea, user)."""

    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("idea_id", "user_id", name="uq_like_idea_user"),)

    id = Column(Integer, primary_key=True, index=True)
    idea_id = Column(
        Integer, ForeignKey("ideas.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    idea = relationship("Idea", back_populates="likes")
    user = relationship("User", back_populates="likes")
