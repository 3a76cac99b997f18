"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (JWT_SECRET, DATABASE_URL)
    - get_settings() is cached (lru_cache) — single instance per process
    - token_expiry_minutes unset means tokens carry no exp claim

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - order_status_strict defaults to False: status updates stay permissive unless opted in
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://rigstore:rigstore@db:5432/rigstore"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Credentials
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    token_expiry_minutes: int | None = None
    password_hash_rounds: int = 12
    password_hash_timeout_seconds: float = 5.0

    # Orders
    order_status_strict: bool = False
    default_revenue_status: str = "Delivered"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    host: str = "0.0.0.0"  # nosec B104
    port: int = 8000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
