"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables
(and an optional .env file).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Development defaults for non-sensitive values; secrets must be
  overridden outside development

Usage:
    from rolegate.core.config import settings

    ttl = settings.permission_cache_ttl_seconds

    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rolegate.core.enums import Environment

MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. .env file
        3. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON instead of console format",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./rolegate.db",
        description="SQLAlchemy async database URL",
    )
    db_echo: bool = Field(
        default=False,
        description="Log all SQL statements",
    )

    # Cache (None disables the permission cache store entirely)
    redis_url: str | None = Field(
        default=None,
        description="Redis connection URL for the permission cache",
    )
    permission_cache_ttl_seconds: int = Field(
        default=900,
        gt=0,
        description="TTL for cached effective permission sets (seconds)",
    )

    # Tokens
    jwt_access_secret: str = Field(
        default="dev-access-secret-change-me-0123456789abcdef",
        description="HMAC secret for access tokens (min 32 chars)",
    )
    jwt_refresh_secret: str = Field(
        default="dev-refresh-secret-change-me-0123456789abcdef",
        description="HMAC secret for refresh tokens (min 32 chars)",
    )
    jwt_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    access_token_expire_minutes: int = Field(
        default=15,
        gt=0,
        description="Access token lifetime in minutes",
    )
    refresh_token_expire_days: int = Field(
        default=7,
        gt=0,
        description="Refresh token lifetime in days",
    )

    # Password handling
    bcrypt_rounds: int = Field(
        default=12,
        description="Bcrypt cost factor",
    )
    password_reset_expire_minutes: int = Field(
        default=60,
        gt=0,
        description="Password reset token lifetime in minutes",
    )
    password_reset_url_base: str = Field(
        default="http://localhost:5173/reset-password",
        description="Frontend URL that receives ?token=<raw token>",
    )

    # RBAC
    default_role_name: str = Field(
        default="User",
        description="Role assigned to self-registered users",
    )
    seed_admin_email: str = Field(
        default="admin@example.com",
        description="Bootstrap administrator email (seeder)",
    )
    seed_admin_password: str = Field(
        default="admin123",
        description="Bootstrap administrator password (seeder)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """
        Validate bcrypt rounds are within safe range.

        Raises:
            ValueError: If rounds are not between 4 and 31.
        """
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @field_validator("jwt_access_secret", "jwt_refresh_secret")
    @classmethod
    def validate_secret_length(cls, v: str) -> str:
        """
        Validate JWT secrets are long enough for HMAC-SHA256.

        Raises:
            ValueError: If the secret is shorter than 32 characters.
        """
        if len(v) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"JWT secrets must be at least {MIN_SECRET_LENGTH} characters"
            )
        return v

    @field_validator("password_reset_url_base")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Remove trailing slashes from URLs."""
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing or CI environment."""
        return self.environment in (Environment.TESTING, Environment.CI)

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
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
