"""FastAPI dependencies for authentication, access control and clients."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.exceptions import BadRequest, Unauthorized
from src.models.user import User
from src.services.access import Predicate, check_access, only_admin
from src.services.auth import resolve_token_user
from src.services.avatar_storage import AvatarStorage
from src.services.comment_client import CommentClient
from src.services.idea_client import IdeaClient
from src.services.like_client import LikeClient
from src.services.role_client import RoleClient
from src.services.tag_client import TagClient
from src.services.user_client import UserClient

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if credentials is None:
        raise Unauthorized("missing bearer token")
    return resolve_token_user(db, credentials.credentials)


def get_avatar_storage() -> AvatarStorage:
    """Get avatar storage instance."""
    return AvatarStorage()


def get_user_client(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[AvatarStorage, Depends(get_avatar_storage)],
) -> UserClient:
    return UserClient(db, storage)


def get_role_client(db: Annotated[Session, Depends(get_db)]) -> RoleClient:
    return RoleClient(db)


def get_tag_client(db: Annotated[Session, Depends(get_db)]) -> TagClient:
    return TagClient(db)


def get_idea_client(db: Annotated[Session, Depends(get_db)]) -> IdeaClient:
    return IdeaClient(db)


def get_comment_client(db: Annotated[Session, Depends(get_db)]) -> CommentClient:
    return CommentClient(db)


def get_like_client(db: Annotated[Session, Depends(get_db)]) -> LikeClient:
    return LikeClient(db)


# Ownership predicates, built per request from the request's session.
PredicateFactory = Callable[[Session], Predicate]


def idea_owner(db: Session) -> Predicate:
    return IdeaClient(db).user_owns


def comment_owner(db: Session) -> Predicate:
    return CommentClient(db).user_owns


def like_owner(db: Session) -> Predicate:
    return LikeClient(db).user_owns


def user_self(db: Session) -> Predicate:
    return UserClient(db).user_owns


def admin_only(db: Session) -> Predicate:
    return only_admin


def user_has_access(predicate_factory: PredicateFactory, id_param: str = "id"):
    """Build a dependency that authenticates the caller and applies the access policy.

    ``id_param`` names the path parameter holding the target resource id.
    The dependency resolves to the authenticated user.
    """

    async def dependency(
        request: Request,
        current_user: Annotated[User, Depends(get_current_user)],
        db: Annotated[Session, Depends(get_db)],
    ) -> User:
        raw_id = request.path_params.get(id_param, "0")
        try:
            resource_id = int(raw_id)
        except ValueError:
            raise BadRequest(f"Invalid {id_param}: {raw_id}") from None

        await check_access(current_user, resource_id, predicate_factory(db))
        return current_user

    return dependency
