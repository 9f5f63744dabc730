"""Async database engine and per-request session management."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from usersapi.core.config import Settings


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the pooled async engine. Connections are opened lazily on first use."""
    url = settings.database_url
    if url.get_backend_name() == "sqlite":
        # One shared connection so an in-memory database outlives each session.
        return create_async_engine(
            url,
            echo=settings.DEBUG,
            poolclass=StaticPool,
        )
    return create_async_engine(
        url,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
    )


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Rows stay readable after commit; the session is closed right after the request.
    return async_sessionmaker(engine, autoflush=False, expire_on_commit=False)


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a DB session and closes it when done."""
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with session_factory() as db:
        yield db
