"""Core app configuration and database."""

from gatehouse.core.config import get_settings, settings
from gatehouse.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
