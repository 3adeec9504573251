"""Authorization policy.

Mutations are gated by ``check_access``: administrators always pass, anyone
else passes only when the resource's ownership predicate says they own it.
Predicates are async callables ``(user, resource_id) -> bool`` and may raise
``NotFound``, which is propagated so callers can tell a missing resource
apart from a forbidden one.
"""

import logging
from collections.abc import Awaitable, Callable

from src.config import get_settings
from src.exceptions import Forbidden
from src.models.user import User

logger = logging.getLogger(__name__)

Predicate = Callable[[User, int], Awaitable[bool]]


def is_user_admin(user: User | None) -> bool:
    """Check if the user holds the administrator role."""
    if user is None or user.role_id is None:
        return False
    return user.role_id == get_settings().admin_role_id


async def only_admin(user: User, resource_id: int) -> bool:
    """Ownership predicate for admin-only operations: nobody owns anything."""
    return False


async def check_access(user: User | None, resource_id: int, predicate: Predicate) -> None:
    """Raise ``Forbidden`` unless ``user`` may act on ``resource_id``."""
    if user is None:
        raise Forbidden("access check reached without an authenticated user")

    if is_user_admin(user):
        logger.info(f"Admin bypass for user {user.id} on resource {resource_id}")
        return

    if await predicate(user, resource_id):
        return

    raise Forbidden(f"user {user.id} does not own resource {resource_id}")
