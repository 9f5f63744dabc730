"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

# Async dialect+driver pairs the store layer is tested against.
VALID_DB_DRIVERS = (
    "postgresql+asyncpg",
    "sqlite+aiosqlite",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database: either the DB_* parts or a full DATABASE_URL (which wins when set)
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_HOST: str = "localhost"
    DB_PORT: int | None = None
    DB_USER: str = "postgres"
    DB_PASS: SecretStr = SecretStr("")
    DB_NAME: str = "users"
    DATABASE_URL: str | None = None
    DB_POOL_SIZE: int = 5

    # Bcrypt cost (log2 rounds). 10 keeps hashing well under a second per request.
    BCRYPT_ROUNDS: int = 10

    # GET /users and GET /users/{id} omit the password hash unless enabled.
    EXPOSE_PASSWORD_HASH: bool = False

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("DB_DRIVER")
    @classmethod
    def validate_db_driver(cls, v: str) -> str:
        v = v.strip()
        if v not in VALID_DB_DRIVERS:
            raise ValueError(
                f"DB_DRIVER must be one of: {', '.join(VALID_DB_DRIVERS)}"
            )
        return v

    @field_validator("DB_HOST", "DB_USER", "DB_NAME")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Database host, user and name must be non-empty")
        return v.strip()

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not any(v.startswith(f"{driver}:") for driver in VALID_DB_DRIVERS):
            raise ValueError(
                "DATABASE_URL must use an async driver (e.g. postgresql+asyncpg:// or sqlite+aiosqlite://)"
            )
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("DB_POOL_SIZE must be between 1 and 100")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def database_url(self) -> URL:
        """SQLAlchemy URL built from DATABASE_URL or the individual DB_* settings."""
        if self.DATABASE_URL:
            return make_url(self.DATABASE_URL)
        return URL.create(
            drivername=self.DB_DRIVER,
            username=self.DB_USER,
            password=self.DB_PASS.get_secret_value() or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
