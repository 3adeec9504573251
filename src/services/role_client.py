"""Role client."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from src.exceptions import BadRequest, NotFound
from src.models.role import Role
from src.models.user import User

logger = logging.getLogger(__name__)


class RoleClient:
    """Role lookups and admin-only mutations."""

    TAG = "role"

    def __init__(self, db: Session):
        self.db = db

    async def all(self) -> list[Role]:
        return self.db.query(Role).order_by(Role.id).all()

    async def all_with_users(self) -> list[Role]:
        return self.db.query(Role).options(selectinload(Role.users)).order_by(Role.id).all()

    async def select(self, role_id: int) -> Role:
        role = self.db.query(Role).filter(Role.id == role_id).first()
        if role is None:
            raise NotFound(self.TAG, f"No role with id: {role_id}")
        return role

    async def select_with_users(self, role_id: int) -> Role:
        role = (
            self.db.query(Role)
            .options(selectinload(Role.users))
            .filter(Role.id == role_id)
            .first()
        )
        if role is None:
            raise NotFound(self.TAG, f"No role with id: {role_id}")
        return role

    async def exists(self, role_id: int) -> bool:
        """Check if a role with this id exists."""
        return self.db.query(Role.id).filter(Role.id == role_id).first() is not None

    async def create(self, fields: dict[str, Any]) -> Role:
        role = Role(name=fields["name"])
        self.db.add(role)
        self.db.commit()
        self.db.refresh(role)
        logger.info(f"Created new role: {role.id} {role.name}")
        return role

    async def update(self, role_id: int, fields: dict[str, Any]) -> Role:
        role = await self.select(role_id)
        role.name = fields["name"]
        self.db.commit()
        self.db.refresh(role)
        return role

    async def remove(self, role_id: int) -> Role:
        """Delete a role. Roles still held by a user cannot be removed."""
        role = await self.select_with_users(role_id)
        if self.db.query(User.id).filter(User.role_id == role_id).first() is not None:
            raise BadRequest("Role is still assigned to users", f"role {role_id} in use")

        try:
            self.db.delete(role)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise BadRequest("Unable to remove role", str(e)) from e
        return role
