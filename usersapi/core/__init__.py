"""Core app configuration, database and password hashing."""

from usersapi.core.config import Settings, get_settings
from usersapi.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
