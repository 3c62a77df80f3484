"""
ClimaTask Backend — Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a module-level `settings` object.
       The application factory also accepts an explicit Settings instance,
       which is how the test suite points the app at SQLite.
Who:   Imported by the app factory, the database layer, services and Alembic.

Database configuration comes in two forms:
    1. DATABASE_URL: a full SQLAlchemy async URL (used by tests and by
       deployments that already have a DSN).
    2. DATABASE_HOST / DATABASE_USER / DATABASE_PASSWORD / DATABASE_NAME /
       DATABASE_PORT, assembled into a postgresql+asyncpg URL.
    One of the two must be present at start-up.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability. Every value has a
    development default except the database coordinates.
    """

    # ── Database ──────────────────────────────────────────────────────────
    database_url: Optional[str] = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides the DATABASE_* parts",
    )
    database_host: Optional[str] = Field(default=None)
    database_user: Optional[str] = Field(default=None)
    database_password: Optional[str] = Field(default=None)
    database_name: Optional[str] = Field(default=None)
    database_port: int = Field(default=5432, ge=1, le=65535)

    # What: Connection pool sizing. max_overflow=0 keeps the pool bounded,
    # so concurrent requests queue for a slot instead of opening more.
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=0, ge=0, le=50)

    # What: Seconds a request waits for a free pool slot before failing
    db_pool_timeout: float = Field(default=20.0, gt=0, le=300)

    # What: Seconds allowed to establish a new database connection
    db_connect_timeout: float = Field(default=20.0, gt=0, le=300)

    db_pool_pre_ping: bool = Field(default=True)

    # ── Weather Upstream (Open-Meteo) ─────────────────────────────────────
    weather_api_url: str = Field(default="https://api.open-meteo.com/v1/forecast")

    # What: Total timeout for one outbound forecast request (seconds)
    weather_timeout: float = Field(default=10.0, gt=0, le=120)

    # What: Attempts for transport-level failures. 1 = no retry.
    weather_retry_attempts: int = Field(default=1, ge=1, le=5)
    weather_retry_max_wait: int = Field(default=4, ge=1, le=30)

    # What: Shared secret expected in the `apikey` query param of /climate.
    # This is a placeholder gate, not an authentication scheme.
    climate_api_key: str = Field(default="climate")

    # ── Credentials ───────────────────────────────────────────────────────
    # What: bcrypt cost factor. 4 is the library minimum (used by tests).
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*"
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> str:
        """
        What:  The URL handed to create_async_engine().
        How:   DATABASE_URL wins; otherwise the DATABASE_* parts are assembled
               into a postgresql+asyncpg URL (password escaped by URL.create).
        """
        if self.database_url:
            return self.database_url
        url = URL.create(
            drivername="postgresql+asyncpg",
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )
        return url.render_as_string(hide_password=False)

    def validate_required(self) -> None:
        """
        What:  Validates that the database is configured.
        When:  Called during app startup (lifespan).
        Raises ValueError listing every missing variable.
        """
        if self.database_url:
            return
        errors = []
        for field_name in ("database_host", "database_user", "database_name"):
            if not getattr(self, field_name):
                errors.append(f"{field_name.upper()} is not set (or set DATABASE_URL)")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Module-level instance used when no explicit Settings is passed to create_app()
settings = Settings()
