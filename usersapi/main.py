"""FastAPI application entrypoint. No business logic; only wiring, lifecycle and middleware."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usersapi import __version__
from usersapi.api import router
from usersapi.api.errors import ApiError, api_error_handler, unhandled_error_handler
from usersapi.core.config import Settings, get_settings
from usersapi.core.database import create_engine_from_settings, create_sessionmaker

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the pooled engine once at startup and dispose of it on shutdown."""
    settings = get_settings()
    engine = create_engine_from_settings(settings)
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)
    logger.info(
        "Database engine ready",
        extra={"backend": engine.url.get_backend_name(), "host": engine.url.host},
    )
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(
        title="Users API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(ApiError, api_error_handler)
    application.add_exception_handler(Exception, unhandled_error_handler)
    application.include_router(router)

    @application.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "users-api"}

    return application


app = create_app()
