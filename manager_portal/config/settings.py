"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
All settings are validated at startup - missing required values will raise an error.

Production Mode:
    When app_env="production", additional validations apply:
    - debug must be False
    - cors_allowed_origins cannot be ["*"]
    - session cookies are marked secure
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # GraphQL API
    # -------------------------------------------------------------------------
    graphql_api_url: str = Field(..., description="GraphQL endpoint used for every read and write")

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------
    session_secret: SecretStr = Field(..., description="Secret used to sign session tokens")
    session_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    session_expire_minutes: int = Field(
        default=60,
        ge=1,
        description="Session lifetime in minutes, renewed on every protected page",
    )
    session_cookie_name: str = Field(default="portal_session", description="Session cookie name")

    # -------------------------------------------------------------------------
    # Uploads
    # -------------------------------------------------------------------------
    upload_api_token: SecretStr | None = Field(
        default=None,
        description="Bearer token for server-side upload mutations",
    )
    upload_dir: Path = Field(
        default=Path("public/images"),
        description="Directory where uploaded images are stored",
    )
    upload_endpoint_url: str | None = Field(
        default=None,
        description="External upload endpoint. Files are stored locally when unset.",
    )
    asset_base_url: str = Field(
        default="",
        description="Prefix prepended to image URLs returned by the API",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind host for the development server")
    api_port: int = Field(default=8000, description="Bind port for the development server")

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins. Use ['*'] for development only.",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def session_cookie_secure(self) -> bool:
        return self.is_production

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production":
            errors = []

            if self.debug:
                errors.append("debug must be False in production")

            if "*" in self.cors_allowed_origins:
                errors.append("cors_allowed_origins cannot contain '*' in production")

            if len(self.session_secret.get_secret_value()) < 32:
                errors.append("session_secret must be at least 32 characters in production")

            if errors:
                raise ValueError(
                    f"Production configuration errors: {'; '.join(errors)}"
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
