"""Idea client.

Ideas carry a set of tags through ``IdeaTag`` join rows. Every write that
names tags validates the full set against the tag table first; a single
unknown id rejects the whole write and leaves existing links untouched.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from src.config import get_settings
from src.exceptions import BadRequest, NotFound
from src.models.comment import Comment
from src.models.idea import Idea, IdeaTag
from src.models.like import Like
from src.models.tag import Tag
from src.models.user import User

logger = logging.getLogger(__name__)


class IdeaClient:
    """Ideas, their tag links, listing and ownership."""

    TAG = "idea"

    def __init__(self, db: Session, per_page: int | None = None):
        self.db = db
        self.per_page = per_page or get_settings().ideas_per_page

    def _public_options(self) -> list:
        return [
            selectinload(Idea.user),
            selectinload(Idea.tag_links).selectinload(IdeaTag.tag),
            selectinload(Idea.comments).selectinload(Comment.user),
            selectinload(Idea.likes),
        ]

    async def all(
        self,
        page: int = 0,
        tag_ids: list[int] | None = None,
        sort: str | None = None,
        order: str = "desc",
    ) -> list[Idea]:
        """One page of ideas.

        ``tag_ids`` keeps ideas having at least one of the tags. ``sort`` is
        one of ``likes``, ``comments`` or ``date``; ``order`` is ``asc`` or
        anything else, which means ``desc``.
        """
        query = self.db.query(Idea).options(*self._public_options())
        if tag_ids:
            query = query.filter(Idea.tag_links.any(IdeaTag.tag_id.in_(tag_ids)))
        query = self._order_by(query, sort, order)
        return query.offset(page * self.per_page).limit(self.per_page).all()

    def _order_by(self, query, sort: str | None, order: str):
        ascending = order == "asc"

        if sort == "likes":
            key = (
                select(func.count(Like.id))
                .where(Like.idea_id == Idea.id)
                .correlate(Idea)
                .scalar_subquery()
            )
        elif sort == "comments":
            key = (
                select(func.count(Comment.id))
                .where(Comment.idea_id == Idea.id)
                .correlate(Idea)
                .scalar_subquery()
            )
        elif sort == "date":
            key = Idea.created_at
        else:
            return query.order_by(Idea.id)

        key = key.asc() if ascending else key.desc()
        tiebreak = Idea.id.asc() if ascending else Idea.id.desc()
        return query.order_by(key, tiebreak)

    async def select(self, idea_id: int) -> Idea:
        idea = (
            self.db.query(Idea)
            .options(*self._public_options())
            .filter(Idea.id == idea_id)
            .first()
        )
        if idea is None:
            raise NotFound(self.TAG, f"No idea with id: {idea_id}")
        return idea

    def _resolve_tags(self, tag_ids: list[int]) -> list[Tag] | None:
        """All requested tags, or ``None`` when any id is unknown."""
        tags = self.db.query(Tag).filter(Tag.id.in_(tag_ids)).order_by(Tag.id).all()
        if len(tags) != len(tag_ids):
            return None
        return tags

    async def create(self, fields: dict[str, Any], owner: User) -> Idea:
        tags = self._resolve_tags(fields["tags"])
        if tags is None:
            raise BadRequest(
                "No tag exists with that id, cannot create idea", f"tags: {fields['tags']}"
            )

        idea = Idea(
            title=fields["title"],
            content=fields["content"],
            user_id=owner.id,
            tag_links=[IdeaTag(tag=tag) for tag in tags],
        )
        self.db.add(idea)
        self.db.commit()
        logger.info(f"Created new idea {idea.id} for user {owner.id}")
        return await self.select(idea.id)

    async def update(self, fields: dict[str, Any], idea_id: int) -> Idea:
        """Replace title, content and the whole tag set of an idea.

        Tags are mandatory. They are validated before anything is touched;
        then the old links are cleared and the new ones created in the same
        transaction.
        """
        tag_ids = fields.get("tags")
        if tag_ids is None:
            raise BadRequest("Tags not sent")

        tags = self._resolve_tags(tag_ids)
        if tags is None:
            raise BadRequest(
                "One or more of the tags do not exist, cannot update idea", f"tags: {tag_ids}"
            )

        try:
            idea = self.db.query(Idea).filter(Idea.id == idea_id).one()

            idea.tag_links.clear()
            self.db.flush()

            idea.tag_links.extend(IdeaTag(tag=tag) for tag in tags)
            idea.title = fields["title"]
            idea.content = fields["content"]
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise BadRequest("Idea does not exist, cannot update", str(e)) from e

        return await self.select(idea_id)

    async def remove(self, idea_id: int) -> Idea:
        """Delete an idea with its tag links, comments and likes."""
        idea = await self.select(idea_id)
        self.db.delete(idea)
        self.db.commit()
        return idea

    async def user_owns(self, user: User, idea_id: int) -> bool:
        idea = self.db.query(Idea.user_id).filter(Idea.id == idea_id).first()
        if idea is None:
            raise NotFound(self.TAG, f"No idea with id: {idea_id}")
        return idea.user_id == user.id
