"""Liveness check that round-trips to the database."""

from typing import Annotated

from fastapi import APIRouter, Depends

from usersapi.api.deps import get_user_service
from usersapi.api.errors import server_error
from usersapi.schemas.health import PingResponse
from usersapi.schemas.user import ErrorResponse
from usersapi.services.user_store import StoreFailure
from usersapi.services.users import UserService

router = APIRouter()


@router.get("", response_model=PingResponse, responses={500: {"model": ErrorResponse}})
async def ping(service: Annotated[UserService, Depends(get_user_service)]) -> PingResponse:
    """
    Return "ok" with the database's current time.
    Used by load balancers and monitoring; 500 when the database is unreachable.
    """
    try:
        now = await service.ping()
    except StoreFailure as e:
        raise server_error("Database error", e, operation="ping") from e
    return PingResponse(status="ok", time=now)
