"""User endpoints: registration, public lookups, self-service and admin mutations."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gatehouse.api.v1.auth import get_current_identity, require_admin
from gatehouse.core.database import get_db
from gatehouse.core.errors import NotFoundError, RequestValidationFailed
from gatehouse.models import User
from gatehouse.schemas.auth import PublicUser, TokenCheckResponse, TokenIdentity
from gatehouse.schemas.user import (
    AdminUserUpdate,
    UserCreate,
    UserMessageResponse,
    UserSelfUpdate,
)
from gatehouse.services import user_store
from gatehouse.services.user_store import DuplicateEmailError

router = APIRouter()

USER_NOT_FOUND_MESSAGE = "User not found"


def _envelope(message: str, user: User) -> UserMessageResponse:
    return UserMessageResponse(message=message, user=PublicUser.model_validate(user))


@router.get("", response_model=list[PublicUser])
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[PublicUser]:
    """List all users without password or role."""
    return [PublicUser.model_validate(u) for u in user_store.list_users(db)]


@router.post("", response_model=UserMessageResponse)
def register_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
) -> UserMessageResponse:
    """Create a user with role 'user'. Emails must be unique."""
    try:
        user = user_store.create_user(
            db,
            username=body.username,
            email=str(body.email),
            password=body.password,
        )
    except DuplicateEmailError as e:
        raise RequestValidationFailed(e.message) from e
    return _envelope("User created", user)


@router.get("/token", response_model=TokenCheckResponse)
def check_token(
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
) -> TokenCheckResponse:
    """Echo the identity carried by a live token."""
    return TokenCheckResponse(user=identity)


@router.put("", response_model=UserMessageResponse)
def update_own_user(
    body: UserSelfUpdate,
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> UserMessageResponse:
    """Update the caller's own record. The target id comes from the token; role cannot change."""
    changes = body.model_dump(exclude_unset=True)
    try:
        user = user_store.update_user(db, identity.id, changes)
    except DuplicateEmailError as e:
        raise RequestValidationFailed(e.message) from e
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return _envelope("User updated", user)


@router.put("/admin", response_model=UserMessageResponse)
def update_user_as_admin(
    body: AdminUserUpdate,
    _admin: Annotated[TokenIdentity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserMessageResponse:
    """(Admin only) Update any user, including role. The target id is taken from the body."""
    changes = body.model_dump(exclude_unset=True, exclude={"id"})
    try:
        user = user_store.update_user(db, body.id, changes)
    except DuplicateEmailError as e:
        raise RequestValidationFailed(e.message) from e
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return _envelope("User updated", user)


@router.delete("", response_model=UserMessageResponse)
def delete_own_user(
    identity: Annotated[TokenIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> UserMessageResponse:
    """Delete the caller's own record."""
    user = user_store.delete_user(db, identity.id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return _envelope("User deleted", user)


@router.delete("/admin/{user_id}", response_model=UserMessageResponse)
def delete_user_as_admin(
    user_id: str,
    _admin: Annotated[TokenIdentity, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserMessageResponse:
    """(Admin only) Delete any user by id."""
    user = user_store.delete_user(db, user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return _envelope("User deleted", user)


@router.get("/{user_id}", response_model=PublicUser)
def get_user(
    user_id: str,
    db: Annotated[Session, Depends(get_db)],
) -> PublicUser:
    """Fetch one user by id without password or role."""
    user = user_store.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND_MESSAGE)
    return PublicUser.model_validate(user)
