# Fichier: academy/core/config.py
from pydantic_settings import BaseSettings
from typing import List
from pydantic import AliasChoices, Field, ValidationError, field_validator
import sys


class Settings(BaseSettings):
    APP_NAME: str = "AI Algorithms Academy"
    VERSION: str = "1.0.0"

    HOST: str = "0.0.0.0"
    PORT: int = 3001

    DATABASE_URL: str = "sqlite:///./academy.sqlite"

    FRONTEND_URL: str = "http://localhost:5173"
    BACKEND_CORS_ORIGINS: List[str] = []

    # NODE_ENV is accepted so existing deployments keep their environment files.
    ENVIRONMENT: str = Field(
        "development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
    )
    LOG_LEVEL: str = "INFO"

    # --- Rate limiting (per client IP, on /api/*) ---
    RATE_LIMIT: str = "100/15 minutes"
    RATE_LIMIT_ENABLED: bool = True
    GZIP_MINIMUM_SIZE: int = 1024

    # Performance instrumentation
    SQLALCHEMY_SLOW_QUERY_THRESHOLD_MS: int = 300

    # Client side
    CLIENT_TIMEOUT_SECONDS: float = 5.0

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_development(self) -> bool:
        return (self.ENVIRONMENT or "").lower() in {"development", "local"}

    @property
    def cors_origins(self) -> list[str]:
        origins = [self.FRONTEND_URL, *self.BACKEND_CORS_ORIGINS]
        return sorted({origin.rstrip("/") for origin in origins if origin})

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _normalize_database_url(cls, value: str) -> str:
        """Ensure SQLite URLs always use the synchronous driver.

        The store is accessed through a synchronous engine, so async driver
        variants (``sqlite+aiosqlite://``) are downgraded to ``sqlite://``.
        A bare filesystem path such as ``./database.sqlite`` is turned into a
        proper SQLite URL. Other backends are left untouched.
        """

        if not isinstance(value, str):
            return value

        value = value.strip()
        if value.startswith("sqlite+aiosqlite://"):
            return "sqlite://" + value[len("sqlite+aiosqlite://") :]

        if "://" not in value and value:
            return f"sqlite:///{value}"

        return value


def _log_settings_validation_error(exc: ValidationError) -> None:
    """Pretty-print missing or invalid environment variables.

    The exception bubbles up during module import, so the structured error
    payload is printed before re-raising to make the faulty variable obvious
    in server logs.
    """

    print("Configuration error while loading environment variables:", file=sys.stderr)

    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Unknown validation error")
        type_name = error.get("type")
        hint = f"{message} (type={type_name})" if type_name else message
        print(f"  - {location}: {hint}", file=sys.stderr)


try:
    settings = Settings()
except ValidationError as exc:  # pragma: no cover - exercised at runtime
    _log_settings_validation_error(exc)
    raise
