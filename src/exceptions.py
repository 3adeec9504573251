"""Application error types.

Every error the service raises on purpose is an ``ApiError``. Each carries the
HTTP status it maps to, a message that is safe to return to the client, and an
optional ``dev`` payload that is logged but never sent back.

    ApiError
    ├── BadRequest    → 400
    ├── Unauthorized  → 401
    ├── Forbidden     → 403
    └── NotFound      → 404

The handlers in ``src.main`` turn these into ``{"status": ..., "msg": ...}``
bodies. Anything that is not an ``ApiError`` becomes a generic 500.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, dev: Any = None):
        super().__init__(message)
        self.message = message
        self.dev = dev

    def json(self) -> dict[str, Any]:
        """Body returned to the client."""
        return {"status": self.status_code, "msg": self.message}

    def log(self) -> None:
        """Log the public message and, when present, the developer detail."""
        logger.warning(f"{type(self).__name__}: {self.message}")
        if self.dev is not None:
            logger.error(f"{type(self).__name__} detail: {self.dev}")


class BadRequest(ApiError):
    """A business rule rejected the write."""

    status_code = 400


class Unauthorized(ApiError):
    """Token missing, invalid, expired, or its subject no longer exists."""

    status_code = 401

    def __init__(self, dev: Any = None):
        super().__init__("Unauthorized", dev)


class Forbidden(ApiError):
    """The authorization predicate denied the request."""

    status_code = 403

    def __init__(self, dev: Any = None):
        super().__init__("Forbidden", dev)


class NotFound(ApiError):
    """A single-row lookup or mutation missed."""

    status_code = 404

    def __init__(self, resource: str, dev: Any = None):
        super().__init__(f"No such {resource} exists", dev)
        self.resource = resource
