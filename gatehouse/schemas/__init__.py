"""Pydantic request/response schemas."""

from gatehouse.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PublicUser,
    TokenCheckResponse,
    TokenIdentity,
    UserOutput,
)
from gatehouse.schemas.health import HealthResponse, MessageResponse
from gatehouse.schemas.user import (
    AdminUserUpdate,
    UserCreate,
    UserMessageResponse,
    UserSelfUpdate,
)

__all__ = [
    "AdminUserUpdate",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "LoginResponse",
    "PublicUser",
    "TokenCheckResponse",
    "TokenIdentity",
    "UserCreate",
    "UserMessageResponse",
    "UserOutput",
    "UserSelfUpdate",
]
