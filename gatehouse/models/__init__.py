"""SQLAlchemy ORM models."""

from gatehouse.models.base import Base
from gatehouse.models.user import Role, User

__all__ = ["Base", "Role", "User"]
