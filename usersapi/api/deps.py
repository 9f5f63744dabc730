"""Request-scoped dependencies wiring the store and service to the DB session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from usersapi.core.config import Settings, get_settings
from usersapi.core.database import get_db
from usersapi.services.user_store import UserStore
from usersapi.services.users import UserService


def get_user_store(db: Annotated[AsyncSession, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_user_service(
    store: Annotated[UserStore, Depends(get_user_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserService:
    return UserService(store, bcrypt_rounds=settings.BCRYPT_ROUNDS)
