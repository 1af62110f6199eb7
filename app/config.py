# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.PROTECTED_ROUTES)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# PROTECTED_ROUTES is a JSON object in the environment, e.g.
#   PROTECTED_ROUTES='{"/api/users/profile": true, "/api/articles/update/:id": true}'
# =============================================================================

import re
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROTECTED_ROUTES: dict[str, bool] = {
    "/api/auth/verify": True,
    "/api/users/profile": True,
    "/api/articles/create": True,
    "/api/articles/update/:id": True,
    "/api/articles/delete/:id": True,
}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance, or passed
    explicitly to create_app() in tests.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    PROJECT_NAME: str = Field(
        default="Gated API",
        description="Title shown in the API documentation"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="API version shown in the documentation"
    )

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    JWT_SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for verifying (and locally minting) tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )

    JWT_AUDIENCE: str | None = Field(
        default=None,
        description="Expected 'aud' claim; unchecked when unset"
    )

    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60,
        ge=1,
        description="Lifetime of locally minted access tokens"
    )

    PROTECTED_ROUTES: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_PROTECTED_ROUTES),
        description="Route patterns that require a verified credential"
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------

    # Comma-separated; "*" reflects any origin not blocked below
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    CORS_BLOCKED_ORIGINS: str = Field(
        default="localhost",
        description="Origins that never receive CORS headers (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_blocked_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_BLOCKED_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_origin_regex(self) -> str | None:
        """
        Regex accepted by CORSMiddleware when every origin is allowed.

        Matches any origin except the blocked ones, which get no CORS headers.
        None when CORS_ORIGINS is an explicit list.
        """
        if "*" not in self.cors_origins_list:
            return None
        blocked = self.cors_blocked_origins_list
        if not blocked:
            return ".*"
        alternatives = "|".join(re.escape(origin) for origin in blocked)
        return f"(?!(?:{alternatives})$).*"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
