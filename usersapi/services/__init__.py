"""User record service and its store adapter."""

from usersapi.services.user_store import StoreFailure, UserStore
from usersapi.services.users import UserService, ValidationFailure

__all__ = ["StoreFailure", "UserService", "UserStore", "ValidationFailure"]
