"""JWT login and auth dependencies (get_current_identity, require_role, require_admin)."""

import logging
from collections.abc import Callable
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gatehouse.core.config import Settings, get_settings
from gatehouse.core.database import get_db
from gatehouse.core.errors import InternalError, InvalidCredentialsError, UnauthorizedError
from gatehouse.core.security import (
    InvalidTokenError,
    PasswordHashError,
    create_access_token,
    decode_access_token,
    verify_password,
)
from gatehouse.models import Role
from gatehouse.schemas.auth import LoginRequest, LoginResponse, TokenIdentity, UserOutput
from gatehouse.services.user_store import get_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"
UNAUTHENTICATED_MESSAGE = "Invalid or missing token"
UNAUTHORIZED_MESSAGE = "Unauthorized"


def _normalize_login_email(identifier: str) -> str | None:
    """Normalize the login identifier the way EmailStr does at registration; None if not an email."""
    try:
        return validate_email(identifier, check_deliverability=False).normalized
    except EmailNotValidError:
        return None


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with email (sent as username) and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>

    Unknown email and wrong password get the same answer, with status
    LOGIN_FAILURE_STATUS.
    """
    email = _normalize_login_email(body.username)
    user = get_user_by_email(db, email) if email is not None else None
    try:
        password_ok = user is not None and verify_password(body.password, user.password_hash)
    except PasswordHashError as e:
        logger.error("Login for user id=%s hit a malformed password hash", user.id)
        raise InternalError("Internal server error") from e
    if not password_ok:
        logger.info("Login rejected for %s", body.username)
        raise InvalidCredentialsError(
            INVALID_CREDENTIALS_MESSAGE, status_code=settings.LOGIN_FAILURE_STATUS
        )

    token = create_access_token(
        secret=settings.JWT_SECRET.get_secret_value(),
        user_id=user.id,
        role=user.role,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )
    logger.info("Login succeeded for user id=%s", user.id)
    return LoginResponse(token=token, user=UserOutput.model_validate(user))


def get_current_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> TokenIdentity:
    """
    Dependency: require a valid Bearer JWT and return the identity it carries.

    Missing, badly signed and malformed tokens all raise the same 401. The store
    is not consulted, so a token outlives the record it was issued for.
    """
    token = credentials.credentials if credentials is not None else None
    try:
        return decode_access_token(
            token=token,
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
    except InvalidTokenError as e:
        logger.debug("Token rejected: %s", e.message)
        raise UnauthorizedError(UNAUTHENTICATED_MESSAGE) from e


def require_role(role: Role) -> Callable[..., TokenIdentity]:
    """Build a dependency that authenticates the request, then requires the given role."""

    def _require_role(
        identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    ) -> TokenIdentity:
        if identity.role != role:
            raise UnauthorizedError(UNAUTHORIZED_MESSAGE)
        return identity

    return _require_role


require_admin = require_role(Role.ADMIN)
