"""Comment client."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from src.exceptions import BadRequest, NotFound
from src.models.comment import Comment
from src.models.idea import Idea
from src.models.user import User

logger = logging.getLogger(__name__)


class CommentClient:
    TAG = "comment"

    def __init__(self, db: Session):
        self.db = db

    async def all(self) -> list[Comment]:
        return (
            self.db.query(Comment)
            .options(selectinload(Comment.user))
            .order_by(Comment.id)
            .all()
        )

    async def select(self, comment_id: int) -> Comment:
        comment = (
            self.db.query(Comment)
            .options(selectinload(Comment.user))
            .filter(Comment.id == comment_id)
            .first()
        )
        if comment is None:
            raise NotFound(self.TAG, f"No comment with id: {comment_id}")
        return comment

    async def create(self, fields: dict[str, Any]) -> Comment:
        """Comment on an idea. ``fields`` carries content, idea_id and user_id."""
        if self.db.query(Idea.id).filter(Idea.id == fields["idea_id"]).first() is None:
            raise BadRequest("Unable to comment this idea", f"No idea with id: {fields['idea_id']}")

        comment = Comment(
            content=fields["content"],
            idea_id=fields["idea_id"],
            user_id=fields["user_id"],
        )
        self.db.add(comment)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("Unable to comment this idea", str(e.orig)) from e

        logger.info(f"Created new comment {comment.id} on idea {comment.idea_id}")
        return await self.select(comment.id)

    async def update(self, comment_id: int, fields: dict[str, Any]) -> Comment:
        comment = await self.select(comment_id)
        comment.content = fields["content"]
        self.db.commit()
        return await self.select(comment_id)

    async def remove(self, comment_id: int) -> Comment:
        comment = await self.select(comment_id)
        self.db.delete(comment)
        self.db.commit()
        return comment

    async def user_owns(self, user: User, comment_id: int) -> bool:
        comment = self.db.query(Comment.user_id).filter(Comment.id == comment_id).first()
        if comment is None:
            raise NotFound(self.TAG, f"No comment with id: {comment_id}")
        return comment.user_id == user.id
