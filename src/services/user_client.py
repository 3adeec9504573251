"""User client."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from src.exceptions import BadRequest, NotFound
from src.models.user import User
from src.services.auth import get_password_hash
from src.services.avatar_storage import AvatarStorage
from src.services.role_client import RoleClient

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "password", "role_id")


class UserClient:
    """User accounts, their role assignment and their avatar."""

    TAG = "user"

    def __init__(self, db: Session, storage: AvatarStorage | None = None):
        self.db = db
        self.storage = storage or AvatarStorage()

    def _public_options(self) -> list:
        return [
            selectinload(User.role),
            selectinload(User.ideas),
            selectinload(User.comments),
            selectinload(User.likes),
        ]

    async def all(self) -> list[User]:
        return self.db.query(User).options(*self._public_options()).order_by(User.id).all()

    async def select(self, user_id: int) -> User:
        user = (
            self.db.query(User)
            .options(*self._public_options())
            .filter(User.id == user_id)
            .first()
        )
        if user is None:
            raise NotFound(self.TAG, f"No user with id: {user_id}")
        return user

    async def select_by_email_with_secret(self, email: str) -> User | None:
        """Look up a user by email for the login flow.

        The returned row carries the password hash; callers must only expose
        it through ``UserResponse``.
        """
        return (
            self.db.query(User)
            .options(*self._public_options())
            .filter(User.email == email)
            .first()
        )

    async def _require_role(self, role_id: int) -> None:
        if not await RoleClient(self.db).exists(role_id):
            raise BadRequest("No role exists with that id", f"role_id: {role_id}")

    async def create(self, fields: dict[str, Any]) -> User:
        """Sign up a user. ``password`` is given in plain text and hashed here."""
        await self._require_role(fields["role_id"])

        user = User(
            name=fields["name"],
            email=fields["email"],
            password=get_password_hash(fields["password"]),
            role_id=fields["role_id"],
            profile_img=fields.get("profile_img") or "",
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("Email is already in use", str(e.orig)) from e

        logger.debug(f"Created new user: {user.id}")
        return await self.select(user.id)

    async def update(self, fields: dict[str, Any], user_id: int) -> User:
        """Apply the given fields. A new password is re-hashed."""
        user = await self.select(user_id)
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None}

        if "role_id" in changes:
            await self._require_role(changes["role_id"])
        if "password" in changes:
            changes["password"] = get_password_hash(changes["password"])

        for key, value in changes.items():
            setattr(user, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise BadRequest("Email is already in use", str(e.orig)) from e

        return await self.select(user_id)

    async def update_password(self, user_id: int, password: str) -> User:
        user = await self.select(user_id)
        user.password = get_password_hash(password)
        self.db.commit()
        return await self.select(user_id)

    async def remove(self, user_id: int) -> User:
        """Delete a user together with their ideas, comments, likes and subscriptions.

        The stored avatar is left for the caller to delete.
        """
        user = await self.select(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info(f"Removed user {user_id}")
        return user

    async def email_exists(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    async def email_is_same_or_unique(self, email: str, user_id: int) -> bool:
        """True if nobody uses the email, or if ``user_id`` already does."""
        owner = self.db.query(User).filter(User.email == email).first()
        if owner is None:
            logger.debug(f"Email {email} is unique")
            return True
        if owner.id == user_id:
            logger.debug(f"Email {email} is same as user's current email")
            return True
        return False

    async def update_avatar(self, user_id: int, new_avatar: str) -> User:
        """Point the user at a new avatar file, then delete the old one.

        The old file is only removed once the new reference is committed, and
        only when the filename actually changed.
        """
        user = await self.select(user_id)
        old_avatar = user.profile_img

        user.profile_img = new_avatar
        self.db.commit()

        if old_avatar and old_avatar != new_avatar:
            self.storage.remove(old_avatar)
        return await self.select(user_id)

    async def remove_avatar(self, user_id: int) -> User:
        user = await self.select(user_id)
        old_avatar = user.profile_img
        if not old_avatar:
            raise NotFound("avatar", f"user {user_id} has no avatar")

        user.profile_img = ""
        self.db.commit()

        self.storage.remove(old_avatar)
        return await self.select(user_id)

    async def user_owns(self, user: User, user_id: int) -> bool:
        """Self-service predicate: a user owns only their own account."""
        target = self.db.query(User.id).filter(User.id == user_id).first()
        if target is None:
            raise NotFound(self.TAG, f"No user with id: {user_id}")
        return target.id == user.id
