"""SQLAlchemy ORM models."""

from usersapi.models.base import Base
from usersapi.models.user import User

__all__ = ["Base", "User"]
