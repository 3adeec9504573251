"""Tag client."""

import logging
from typing import Any

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from src.exceptions import BadRequest, NotFound
from src.models.tag import Tag, TagUser
from src.models.user import User

logger = logging.getLogger(__name__)


class TagClient:
    """Tags and user subscriptions to them."""

    TAG = "tag"

    def __init__(self, db: Session):
        self.db = db

    def _with_users(self):
        return selectinload(Tag.user_links).selectinload(TagUser.user)

    async def all(self) -> list[Tag]:
        return self.db.query(Tag).order_by(Tag.id).all()

    async def all_with_users(self) -> list[Tag]:
        """All tags, each with its subscribed users."""
        return self.db.query(Tag).options(self._with_users()).order_by(Tag.id).all()

    async def select(self, tag_id: int) -> Tag:
        tag = self.db.query(Tag).filter(Tag.id == tag_id).first()
        if tag is None:
            raise NotFound(self.TAG, f"No tag with id: {tag_id}")
        return tag

    async def select_with_users(self, tag_id: int) -> Tag:
        tag = self.db.query(Tag).options(self._with_users()).filter(Tag.id == tag_id).first()
        if tag is None:
            raise NotFound(self.TAG, f"No tag with id: {tag_id}")
        return tag

    async def create(self, fields: dict[str, Any]) -> Tag:
        tag = Tag(name=fields["name"], description=fields.get("description") or "")
        self.db.add(tag)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("Unable to create tag", str(e.orig)) from e

        self.db.refresh(tag)
        logger.info(f"Created new tag: {tag.id} {tag.name}")
        return tag

    async def update(self, tag_id: int, fields: dict[str, Any]) -> Tag:
        tag = await self.select(tag_id)
        for key in ("name", "description"):
            if fields.get(key) is not None:
                setattr(tag, key, fields[key])
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("Unable to update tag", str(e.orig)) from e

        self.db.refresh(tag)
        return tag

    async def remove(self, tag_id: int) -> Tag:
        tag = await self.select(tag_id)
        self.db.delete(tag)
        self.db.commit()
        return tag

    async def add_user_to_tag(self, tag_id: int, user_id: int) -> Tag:
        """Subscribe a user to a tag.

        A second subscription for the same pair hits the (user, tag) primary
        key and is refused with ``BadRequest``; no duplicate row is written.
        """
        missing = []
        if self.db.query(User.id).filter(User.id == user_id).first() is None:
            missing.append(f"User {user_id} does not exist.")
        if self.db.query(Tag.id).filter(Tag.id == tag_id).first() is None:
            missing.append(f"Tag {tag_id} does not exist.")
        if missing:
            raise BadRequest(" ".join(missing))

        try:
            self.db.execute(insert(TagUser).values(tag_id=tag_id, user_id=user_id))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("User is already subscribed to this tag", str(e.orig)) from e

        return await self.select_with_users(tag_id)

    async def remove_user_from_tag(self, tag_id: int, user_id: int) -> Tag:
        link = (
            self.db.query(TagUser)
            .filter(TagUser.tag_id == tag_id, TagUser.user_id == user_id)
            .first()
        )
        if link is None:
            raise BadRequest("User is not subscribed to this tag")

        self.db.delete(link)
        self.db.commit()
        return await self.select_with_users(tag_id)

    async def tag_is_free(self, name: str) -> bool:
        """Advisory check: a concurrent create can still take the name."""
        return self.db.query(Tag.id).filter(Tag.name == name).first() is None
