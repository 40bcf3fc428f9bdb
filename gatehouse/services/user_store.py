"""User persistence: create, look up, update and delete user records with unique emails."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gatehouse.core.security import hash_password
from gatehouse.models import Role, User

logger = logging.getLogger(__name__)

# Columns a caller may change through update_user; password is hashed on the way in.
UPDATABLE_FIELDS = frozenset({"username", "email", "password", "role"})


class DuplicateEmailError(Exception):
    """Raised when a create or update would give two users the same email."""

    def __init__(self, email: str) -> None:
        self.email = email
        self.message = "Email already registered"
        super().__init__(self.message)


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.username, User.id).all()


def count_users(db: Session) -> int:
    return db.query(User).count()


def _commit_or_duplicate(db: Session, email: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmailError(email) from e


def create_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
    role: Role = Role.USER,
) -> User:
    """
    Insert a new user with a hashed password.

    Raises DuplicateEmailError if the email is taken, including when a concurrent
    insert of the same email wins the unique index.
    """
    if get_user_by_email(db, email) is not None:
        raise DuplicateEmailError(email)
    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=Role(role).value,
    )
    db.add(user)
    _commit_or_duplicate(db, email)
    db.refresh(user)
    logger.info("Created user id=%s role=%s", user.id, user.role)
    return user


def update_user(db: Session, user_id: str, changes: dict[str, Any]) -> User | None:
    """
    Apply changes to the user with user_id; return the updated user or None if absent.

    Keys outside UPDATABLE_FIELDS and None values are ignored.
    """
    user = get_user_by_id(db, user_id)
    if user is None:
        return None

    updates = {
        k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None
    }
    if not updates:
        return user

    new_email = updates.get("email")
    if new_email is not None and new_email != user.email:
        existing = get_user_by_email(db, new_email)
        if existing is not None and existing.id != user.id:
            raise DuplicateEmailError(new_email)

    if "password" in updates:
        user.password_hash = hash_password(updates.pop("password"))
    if "role" in updates:
        updates["role"] = Role(updates["role"]).value
    for field, value in updates.items():
        setattr(user, field, value)

    _commit_or_duplicate(db, user.email)
    db.refresh(user)
    logger.info("Updated user id=%s fields=%s", user.id, sorted(changes.keys() & UPDATABLE_FIELDS))
    return user


def delete_user(db: Session, user_id: str) -> User | None:
    """Delete the user with user_id; return the removed record or None if absent."""
    user = get_user_by_id(db, user_id)
    if user is None:
        return None
    db.delete(user)
    db.commit()
    logger.info("Deleted user id=%s", user_id)
    return user
