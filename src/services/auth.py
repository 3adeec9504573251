"""Authentication service for JWT and password handling."""

import logging
import re
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import get_settings
from src.exceptions import BadRequest, NotFound, Unauthorized
from src.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

MIN_PASSWORD_LENGTH = 8


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Passwords bcrypt cannot hash (NUL bytes) never match.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def is_strong_password(password: str) -> bool:
    """At least 8 characters, one uppercase letter and one digit, no NUL bytes."""
    return (
        len(password) >= MIN_PASSWORD_LENGTH
        and "\x00" not in password
        and re.search(r"[A-Z]", password) is not None
        and re.search(r"\d", password) is not None
    )


def create_access_token(user_id: int, role_id: int | None = None) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
    }
    if role_id is not None:
        to_encode["role_id"] = role_id
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def resolve_token_user(db: Session, token: str) -> User:
    """Return the user a token was issued to.

    Raises ``Unauthorized`` when the token does not verify, carries no usable
    subject, or names a user that no longer exists.
    """
    payload = decode_access_token(token)
    if payload is None:
        raise Unauthorized("token failed verification")

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise Unauthorized(f"unusable token subject: {subject!r}") from None

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise Unauthorized(f"token subject {user_id} no longer exists")

    logger.info(f"Authenticated user -- id:{user.id} name:{user.name}")
    return user


def authenticate_user(user: User | None, email: str, password: str) -> User:
    """Check a login attempt against the user looked up by email."""
    if user is None:
        raise NotFound("user", f"No user with email: {email}")
    if not verify_password(password, user.password):
        raise BadRequest("Incorrect password", f"password mismatch for user {user.id}")
    return user
