"""User record lifecycle: create, read, merge-update and delete against the store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from usersapi.core.security import BCRYPT_ROUNDS, hash_password
from usersapi.models import User
from usersapi.models.user import MAX_USER_ID, MUTABLE_FIELDS
from usersapi.services.user_store import UserStore

logger = logging.getLogger(__name__)


class ValidationFailure(Exception):
    """Raised when mandatory input is missing; always fixable by the client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_storable_id(user_id: int) -> bool:
    """Ids outside the id column's range cannot match a row."""
    return 1 <= user_id <= MAX_USER_ID


def _writable_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only client-writable columns that were actually supplied (non-null)."""
    return {
        key: value
        for key, value in fields.items()
        if key in MUTABLE_FIELDS and value is not None
    }


class UserService:
    """
    Business rules for user records. Holds no state between calls: every
    operation goes to the store, and store or hashing failures propagate
    unchanged (StoreFailure, HashingFailure).

    NotFound is reported as a return value (None from get/update, False from
    delete) so callers must branch on it.
    """

    def __init__(self, store: UserStore, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self._store = store
        self._bcrypt_rounds = bcrypt_rounds

    async def ping(self) -> datetime:
        return await self._store.now()

    async def list_all(self) -> list[User]:
        return await self._store.list_all()

    async def get_by_id(self, user_id: int) -> User | None:
        if not _is_storable_id(user_id):
            return None
        return await self._store.get(user_id)

    async def create(self, fields: Mapping[str, Any], password: str | None) -> User:
        """
        Create a user. Password is mandatory here (unlike update) and is hashed
        before anything is written.
        """
        if _is_blank(password):
            raise ValidationFailure("Password is required")
        values = _writable_fields(fields)
        values["password_hash"] = await hash_password(password, self._bcrypt_rounds)
        user = await self._store.insert(values)
        logger.info("User created", extra={"operation": "create", "user_id": user.id})
        return user

    async def update(
        self,
        user_id: int,
        fields: Mapping[str, Any],
        password: str | None = None,
    ) -> User | None:
        """
        Merge supplied fields over the stored record and write the full row back.

        A missing or blank password keeps the stored hash; anything else is
        re-hashed. Returns the merged record as written, detached from the
        session. Read-then-write without a version check, so concurrent
        updates to the same id are last-write-wins.
        """
        if not _is_storable_id(user_id):
            return None
        existing = await self._store.get(user_id)
        if existing is None:
            return None

        merged = {key: getattr(existing, key) for key in MUTABLE_FIELDS}
        merged.update(_writable_fields(fields))
        if _is_blank(password):
            merged["password_hash"] = existing.password_hash
        else:
            merged["password_hash"] = await hash_password(password, self._bcrypt_rounds)

        affected = await self._store.update(user_id, merged)
        if affected == 0:
            # Deleted between the read and the write.
            return None
        logger.info(
            "User updated",
            extra={
                "operation": "update",
                "user_id": user_id,
                "password_changed": not _is_blank(password),
            },
        )
        return User(id=user_id, **merged)

    async def delete(self, user_id: int) -> bool:
        if not _is_storable_id(user_id):
            return False
        affected = await self._store.delete(user_id)
        if affected == 0:
            return False
        logger.info("User deleted", extra={"operation": "delete", "user_id": user_id})
        return True
