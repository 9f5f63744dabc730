"""Pydantic request/response schemas."""

from usersapi.schemas.health import PingResponse
from usersapi.schemas.user import (
    ErrorResponse,
    MessageResponse,
    UserCreate,
    UserRead,
    UserReadWithHash,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "PingResponse",
    "UserCreate",
    "UserRead",
    "UserReadWithHash",
    "UserUpdate",
]
