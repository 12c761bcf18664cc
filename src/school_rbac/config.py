"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "School RBAC API"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./school_rbac.db",
        description="SQLite (aiosqlite) or PostgreSQL connection URL.",
    )
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # CORS settings
    cors_origins: str = "http://localhost:3000"  # Comma-separated list

    # Built-in roles are created as persisted records on startup when missing
    seed_default_roles: bool = True

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_role_modify: int = 20  # requests per minute

    # Remote roles backend used by RolesApiClient
    roles_api_url: str = "http://localhost:5000/api"
    roles_api_timeout: float = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Validate settings for security requirements."""
        # Security: Prevent debug mode in production
        if self.environment == "production" and self.debug:
            raise ValueError(
                "DEBUG mode cannot be enabled in production environment. "
                "This would expose API documentation and detailed error messages."
            )

        if not self.database_url.startswith(("postgresql", "postgres://", "sqlite")):
            raise ValueError("DATABASE_URL must be a PostgreSQL or SQLite URL")

        return self

    @property
    def async_database_url(self) -> str:
        """Get async database URL for SQLAlchemy.

        PostgreSQL URLs are switched to the asyncpg driver and their
        sslmode parameter is converted to ssl for asyncpg compatibility.
        """
        url = self.database_url
        if url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql://", 1)
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            url = url.replace("sslmode=", "ssl=")
        return url

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured database is SQLite."""
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def role_modify_limit(self) -> str:
        """Rate limit string for role mutations."""
        return f"{self.rate_limit_role_modify}/minute"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
