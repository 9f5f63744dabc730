"""User record endpoints: list, get, create, update, delete."""

import json
import logging
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel, ValidationError

from usersapi.api.deps import get_user_service
from usersapi.api.errors import ApiError, server_error
from usersapi.core.config import Settings, get_settings
from usersapi.core.security import HashingFailure
from usersapi.models import User
from usersapi.schemas.user import (
    ErrorResponse,
    MessageResponse,
    UserCreate,
    UserRead,
    UserReadWithHash,
    UserUpdate,
)
from usersapi.services.user_store import StoreFailure
from usersapi.services.users import UserService, ValidationFailure

logger = logging.getLogger(__name__)
router = APIRouter()

BodyT = TypeVar("BodyT", bound=BaseModel)

JSON_CONTENT_TYPES = frozenset({"application/json", ""})
FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})

SERVER_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    500: {"model": ErrorResponse},
}
NOT_FOUND_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": MessageResponse},
    **SERVER_ERROR_RESPONSES,
}


def _body_openapi(model: type[BaseModel]) -> dict[str, Any]:
    """Document the body for both JSON and form submissions (it is read by hand)."""
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
            "required": False,
        }
    }


async def _read_body(request: Request) -> dict[str, Any]:
    """
    Return the request body as a dict. JSON and form-encoded bodies are both
    accepted; an empty body is an empty dict so required-field checks happen
    in the service.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    raw = await request.body()
    if not raw.strip():
        return {}
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        # File parts are not user fields.
        return {key: value for key, value in form.items() if isinstance(value, str)}
    if content_type in JSON_CONTENT_TYPES:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ApiError.bad_request("Request body must be valid JSON") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ApiError.bad_request("Request body must be a JSON object")
        return data
    raise ApiError(
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
        "Content-Type must be application/json, application/x-www-form-urlencoded or multipart/form-data",
    )


async def _parse_body(request: Request, model: type[BodyT]) -> BodyT:
    data = await _read_body(request)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_input=False, include_context=False),
        ) from e


async def create_body(request: Request) -> UserCreate:
    return await _parse_body(request, UserCreate)


async def update_body(request: Request) -> UserUpdate:
    return await _parse_body(request, UserUpdate)


def _render(user: User, settings: Settings) -> dict[str, Any]:
    if settings.EXPOSE_PASSWORD_HASH:
        return UserReadWithHash.model_validate(user).model_dump(mode="json", by_alias=True)
    return UserRead.model_validate(user).model_dump(mode="json")


@router.get("", responses=SERVER_ERROR_RESPONSES)
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> list[dict[str, Any]]:
    """List every user in store order. An empty table gives an empty list."""
    try:
        users = await service.list_all()
    except StoreFailure as e:
        raise server_error("Query failed", e, operation="list") from e
    return [_render(u, settings) for u in users]


@router.get("/{user_id}", responses=NOT_FOUND_RESPONSES)
async def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, Any]:
    try:
        user = await service.get_by_id(user_id)
    except StoreFailure as e:
        raise server_error("Query failed", e, operation="get", user_id=user_id) from e
    if user is None:
        raise ApiError.not_found()
    return _render(user, settings)


@router.post(
    "",
    response_model=UserRead,
    responses={400: {"model": ErrorResponse}, **SERVER_ERROR_RESPONSES},
    openapi_extra=_body_openapi(UserCreate),
)
async def create_user(
    body: Annotated[UserCreate, Depends(create_body)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserRead:
    """
    Create a user from a JSON or form-encoded body. The password is required
    and stored only as a bcrypt hash; the response echoes the record without it.
    """
    try:
        user = await service.create(
            body.model_dump(exclude={"password"}, exclude_unset=True),
            body.password,
        )
    except ValidationFailure as e:
        raise ApiError.bad_request(e.message) from e
    except (StoreFailure, HashingFailure) as e:
        raise server_error("Insert failed", e, operation="create") from e
    return UserRead.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=MessageResponse,
    responses=NOT_FOUND_RESPONSES,
    openapi_extra=_body_openapi(UserUpdate),
)
async def update_user(
    user_id: int,
    body: Annotated[UserUpdate, Depends(update_body)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    """
    Merge-update a user: supplied fields overwrite, the rest keep their stored
    values. A missing or blank password keeps the current hash.
    """
    try:
        user = await service.update(
            user_id,
            body.model_dump(exclude={"password"}, exclude_unset=True),
            body.password,
        )
    except (StoreFailure, HashingFailure) as e:
        raise server_error("Update failed", e, operation="update", user_id=user_id) from e
    if user is None:
        raise ApiError.not_found()
    return MessageResponse(message="User updated successfully")


@router.delete("/{user_id}", response_model=MessageResponse, responses=NOT_FOUND_RESPONSES)
async def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> MessageResponse:
    try:
        deleted = await service.delete(user_id)
    except StoreFailure as e:
        raise server_error("Delete failed", e, operation="delete", user_id=user_id) from e
    if not deleted:
        raise ApiError.not_found()
    return MessageResponse(message=f"User {user_id} deleted successfully")
