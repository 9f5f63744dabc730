"""HTTP routes."""

from fastapi import APIRouter

from usersapi.api import ping, users

router = APIRouter()
router.include_router(ping.router, prefix="/ping", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
