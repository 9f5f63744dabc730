"""Parameterized queries against tbl_users over one async session."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from usersapi.models import User

logger = logging.getLogger(__name__)


class StoreFailure(Exception):
    """Raised when the database rejects or cannot run a statement (connection, constraint, timeout)."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.message = f"Store operation '{operation}' failed"
        super().__init__(self.message)


class UserStore:
    """
    Record store for users. Each write commits immediately; driver errors are
    rolled back and re-raised as StoreFailure with the original chained.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except (SQLAlchemyError, OSError, OverflowError, ValueError) as e:
            # sqlite3 raises OverflowError for ints it cannot bind; asyncpg may
            # raise OSError subclasses on connect before SQLAlchemy wraps anything.
            logger.debug("Rolling back after %s failure: %s", operation, type(e).__name__)
            await self._session.rollback()
            raise StoreFailure(operation) from e

    async def now(self) -> datetime:
        """Return the database server's current time."""
        async with self._guard("now"):
            result = await self._session.execute(select(func.now()))
            return result.scalar_one()

    async def list_all(self) -> list[User]:
        async with self._guard("list_all"):
            result = await self._session.execute(select(User))
            return list(result.scalars().all())

    async def get(self, user_id: int) -> User | None:
        async with self._guard("get"):
            return await self._session.get(User, user_id, populate_existing=True)

    async def insert(self, values: dict[str, Any]) -> User:
        """Insert a row and return it with its assigned id."""
        async with self._guard("insert"):
            user = User(**values)
            self._session.add(user)
            await self._session.commit()
            await self._session.refresh(user)
            return user

    async def update(self, user_id: int, values: dict[str, Any]) -> int:
        """Overwrite the given columns of one row. Returns affected row count."""
        async with self._guard("update"):
            result = await self._session.execute(
                update(User)
                .where(User.id == user_id)
                .values({getattr(User, key): value for key, value in values.items()})
                .execution_options(synchronize_session=False)
            )
            await self._session.commit()
            return result.rowcount

    async def delete(self, user_id: int) -> int:
        """Hard-delete one row. Returns affected row count."""
        async with self._guard("delete"):
            result = await self._session.execute(
                delete(User)
                .where(User.id == user_id)
                .execution_options(synchronize_session=False)
            )
            await self._session.commit()
            return result.rowcount
