"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from gatehouse.models.user import EMAIL_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, Role


class LoginRequest(BaseModel):
    """Credentials for login. username carries the account email."""

    username: str = Field(
        ..., min_length=1, max_length=EMAIL_MAX_LEN, description="Account email"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )


class PublicUser(BaseModel):
    """Public view of a user: no password, no role."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str


class UserOutput(PublicUser):
    """Public view including role, returned to the user who just logged in."""

    role: Role | None = None


class LoginResponse(BaseModel):
    """Successful login: signed token plus the caller's profile."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT bearer token")
    user: UserOutput


class TokenIdentity(BaseModel):
    """Identity resolved from a verified bearer token."""

    id: str = Field(..., min_length=1)
    role: Role


class TokenCheckResponse(BaseModel):
    message: str = "Token is valid"
    user: TokenIdentity
