"""ORM model for application users (auth and RBAC)."""

import uuid
from enum import Enum

from sqlalchemy import CheckConstraint, Column, String

from gatehouse.models.base import Base


# Length limits shared by the columns and the request schemas.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 255
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


def _new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    id is assigned on insert and never changes. email is unique.
    role: 'admin' or 'user'
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user')", name="role"),
    )

    id = Column(String(36), primary_key=True, default=_new_user_id)
    username = Column(String(USERNAME_MAX_LEN), nullable=False)
    email = Column(String(EMAIL_MAX_LEN), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
