"""Like client.

A user can like an idea once. The (idea_id, user_id) unique constraint is
what enforces it; a violation surfaces as ``BadRequest`` without the
database detail.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from src.exceptions import BadRequest, NotFound
from src.models.idea import Idea
from src.models.like import Like
from src.models.user import User

logger = logging.getLogger(__name__)


class LikeClient:
    TAG = "like"

    def __init__(self, db: Session):
        self.db = db

    async def all(self) -> list[Like]:
        return self.db.query(Like).options(selectinload(Like.user)).order_by(Like.id).all()

    async def for_idea(self, idea_id: int) -> dict[str, Any]:
        """Likes on one idea, with their count."""
        if self.db.query(Idea.id).filter(Idea.id == idea_id).first() is None:
            raise NotFound("idea", f"No idea with id: {idea_id}")

        likes = (
            self.db.query(Like)
            .options(selectinload(Like.user))
            .filter(Like.idea_id == idea_id)
            .order_by(Like.id)
            .all()
        )
        return {"likes": likes, "count": len(likes)}

    async def select(self, like_id: int) -> Like:
        like = (
            self.db.query(Like)
            .options(selectinload(Like.user))
            .filter(Like.id == like_id)
            .first()
        )
        if like is None:
            raise NotFound(self.TAG, f"No like with id: {like_id}")
        return like

    async def create(self, fields: dict[str, Any]) -> Like:
        if self.db.query(Idea.id).filter(Idea.id == fields["idea_id"]).first() is None:
            raise BadRequest("Unable to like this idea", f"No idea with id: {fields['idea_id']}")

        like = Like(idea_id=fields["idea_id"], user_id=fields["user_id"])
        self.db.add(like)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("Unable to like this idea", str(e.orig)) from e

        logger.info(f"Created new like {like.id} on idea {like.idea_id}")
        return await self.select(like.id)

    async def create_for_idea(self, idea_id: int, user_id: int) -> Like:
        """Like an idea on behalf of a user."""
        return await self.create({"idea_id": idea_id, "user_id": user_id})

    async def remove(self, like_id: int) -> Like:
        like = await self.select(like_id)
        self.db.delete(like)
        self.db.commit()
        return like

    async def remove_from_idea(self, idea_id: int, user_id: int) -> Like:
        """Take back a user's like without knowing its id.

        "Never liked" and "already unliked" look the same from here; both are
        refused with ``BadRequest``.
        """
        like = (
            self.db.query(Like)
            .options(selectinload(Like.user))
            .filter(Like.idea_id == idea_id, Like.user_id == user_id)
            .first()
        )
        if like is None:
            raise BadRequest(
                "Unable to dislike this idea", f"user {user_id} has no like on idea {idea_id}"
            )

        self.db.delete(like)
        self.db.commit()
        return like

    async def user_owns(self, user: User, like_id: int) -> bool:
        like = self.db.query(Like.user_id).filter(Like.id == like_id).first()
        if like is None:
            raise NotFound(self.TAG, f"No like with id: {like_id}")
        return like.user_id == user.id
