"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from gatehouse.core.config import settings
from gatehouse.models.user import Role
from gatehouse.schemas.auth import TokenIdentity

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class PasswordHashError(Exception):
    """Raised when a stored hash cannot be parsed by bcrypt."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidTokenError(Exception):
    """Raised when a bearer token is absent, badly signed, expired or malformed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Raises PasswordHashError if the stored hash is malformed; callers must not
    report that case as a mismatch.
    """
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise PasswordHashError("Stored password hash is malformed") from e


def create_access_token(
    *,
    secret: str,
    user_id: str,
    role: Role | str,
    algorithm: str = "HS256",
    expire_minutes: int | None = None,
) -> str:
    """Create a JWT carrying id, role and iat; exp is added only when expire_minutes is set."""
    if not secret:
        raise ValueError("JWT secret must be non-empty")
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "id": str(user_id),
        "role": Role(role).value,
        "iat": now,
    }
    if expire_minutes is not None:
        payload["exp"] = now + timedelta(minutes=expire_minutes)
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    *,
    token: str | None,
    secret: str,
    algorithm: str = "HS256",
) -> TokenIdentity:
    """
    Decode and validate a JWT; return the identity it carries.

    Raises InvalidTokenError on a missing token, a bad signature, an expired
    token or a payload without a usable id and role.
    """
    if not token or not token.strip():
        raise InvalidTokenError("Token is missing")
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(f"Token rejected: {e}") from e
    try:
        return TokenIdentity.model_validate(
            {"id": payload.get("id"), "role": payload.get("role")}
        )
    except ValidationError as e:
        raise InvalidTokenError("Token payload is malformed") from e
