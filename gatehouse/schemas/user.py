"""Request/response schemas for user management endpoints."""

from pydantic import BaseModel, EmailStr, Field

from gatehouse.models.user import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    Role,
)
from gatehouse.schemas.auth import PublicUser


class UserCreate(BaseModel):
    """Registration body. role is not accepted here; new users are always 'user'."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class UserSelfUpdate(BaseModel):
    """Partial update of the caller's own record. Unknown keys (including role) are dropped."""

    username: str | None = Field(
        default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN
    )
    email: EmailStr | None = None
    password: str | None = Field(
        default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class AdminUserUpdate(UserSelfUpdate):
    """Admin update of any record, addressed by id in the body."""

    id: str = Field(..., min_length=1)
    role: Role | None = None


class UserMessageResponse(BaseModel):
    """Envelope returned by create, update and delete."""

    message: str
    user: PublicUser
