"""Error bodies for the HTTP surface: {"message": ...} for 404, {"error": ...} otherwise."""

import logging
from typing import Literal

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised by routes to render a non-2xx JSON body with a single key."""

    def __init__(
        self,
        status_code: int,
        message: str,
        key: Literal["message", "error"] = "error",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.key = key
        super().__init__(message)

    @classmethod
    def not_found(cls, message: str = "User not found") -> "ApiError":
        return cls(status.HTTP_404_NOT_FOUND, message, key="message")

    @classmethod
    def bad_request(cls, message: str) -> "ApiError":
        return cls(status.HTTP_400_BAD_REQUEST, message)

    @classmethod
    def server_error(cls, message: str) -> "ApiError":
        return cls(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def server_error(message: str, exc: Exception, **context: object) -> ApiError:
    """
    Log an infrastructure failure for operators and return the generic
    client-facing error. The exception text never goes into the response.
    """
    logger.error(
        message,
        exc_info=exc,
        extra={"error_type": type(exc).__name__, **context},
    )
    return ApiError.server_error(message)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={exc.key: exc.message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything the routes did not map: JSON 500 with no detail."""
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"error_type": type(exc).__name__, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )
