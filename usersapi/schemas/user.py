"""Request/response schemas for user record endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class UserFields(BaseModel):
    """Writable profile fields. Every field is optional at the schema level."""

    firstname: str | None = Field(default=None, max_length=255)
    fullname: str | None = Field(default=None, max_length=255)
    lastname: str | None = Field(default=None, max_length=255)
    username: str | None = Field(default=None, max_length=255)
    status: str | None = Field(default=None, max_length=32)


class UserCreate(UserFields):
    """
    Body for POST /users.

    password is declared optional so a missing one reaches the service and is
    reported as a 400 with a readable message rather than a schema error.
    """

    password: str | None = Field(default=None, description="Plain-text password (required)")


class UserUpdate(UserFields):
    """Body for PUT /users/{id}. Omitted or blank password keeps the current hash."""

    password: str | None = Field(default=None, description="New plain-text password (optional)")


class UserRead(BaseModel):
    """User record as returned to clients (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    firstname: str | None = None
    fullname: str | None = None
    lastname: str | None = None
    username: str | None = None
    status: str | None = None


class UserReadWithHash(UserRead):
    """User record including the stored hash (only when EXPOSE_PASSWORD_HASH is on)."""

    password_hash: str = Field(serialization_alias="passwordHash")


class MessageResponse(BaseModel):
    """Confirmation or not-found body."""

    message: str


class ErrorResponse(BaseModel):
    """Client or server error body."""

    error: str
