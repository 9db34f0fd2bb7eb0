"""
Service configuration loaded with Pydantic Settings.

Values come from environment variables (case-insensitive) and an optional
``.env`` file. The only required value is ``SECRET_KEY``.

Groups:
- Runtime: environment, debug, host, port, log_level
- Tokens: secret_key, algorithm, access_token_expire_minutes
- Policies: policy_backend, rbac_model_path, rbac_policy_path,
  policy_seed_path, database_url, db_echo

Usage:
    from accessgate.core.config import get_settings

    settings = get_settings()
    if settings.policy_backend == "database":
        ...
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from accessgate.core.enums import Environment

DEFAULT_MODEL_PATH = (
    Path(__file__).resolve().parent.parent
    / "infrastructure"
    / "authorization"
    / "model.conf"
)


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. ``.env`` file in the working directory
        3. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, detailed errors)",
    )
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8000, description="Server bind port")
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(default="accessgate", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    # Security configuration
    secret_key: str = Field(
        description="Secret key for JWT token signing (must be kept secure)",
        repr=False,
    )
    algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    access_token_expire_minutes: int = Field(
        default=180,
        description="Access token expiration time in minutes",
    )

    # Authorization (Casbin) configuration
    policy_backend: Literal["file", "database"] = Field(
        default="file",
        description="Where role/policy tuples are persisted",
    )
    rbac_model_path: Path = Field(
        default=DEFAULT_MODEL_PATH,
        description="Casbin model definition (request/policy/role definitions, matcher)",
    )
    rbac_policy_path: Path = Field(
        default=Path("conf/rbac_policy.csv"),
        description="Policy file used by the file backend",
    )
    policy_seed_path: Path | None = Field(
        default=None,
        description="Policy file copied into an empty database store at startup",
    )

    # Database configuration (database backend only)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./accessgate.db",
        description="Database connection URL for the casbin_rule table",
    )
    db_echo: bool = Field(default=False, description="Log all SQL queries")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, value: str) -> str:
        """Require a 256-bit HMAC secret."""
        if len(value) < 32:
            raise ValueError("secret_key must be at least 32 characters (256 bits)")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise and validate the log level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()  # type: ignore[call-arg]  # Pydantic Settings loads from env
