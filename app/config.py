# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.prefixes.login)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Prefixes(BaseModel):
    """Paths of the authentication endpoints, relative to the API prefix."""
    login: str
    logout: str
    renew: str
    signup: str
    register_path: str
    password_reset: str
    password_update: str


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    MONITOR_DEBUG: bool = Field(
        default=False,
        description="Report route and response events and enrich request events"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    API_PREFIX: str = Field(
        default="/api",
        description="Path prefix for all REST endpoints"
    )

    ADMIN_PATH: str = Field(
        default="/admin",
        description="Path of the admin pages"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="Algorithm used to sign auth tokens"
    )

    TOKEN_EXPIRES_MINUTES: int = Field(
        default=60 * 24,
        ge=1,
        description="Lifetime of an auth token"
    )

    RESET_TOKEN_EXPIRES_MINUTES: int = Field(
        default=30,
        ge=1,
        description="Lifetime of a password reset token"
    )

    AUTH_COOKIE_NAME: str = Field(
        default="token",
        description="Cookie carrying the auth token for web pages"
    )

    DEFAULT_ROLE: str = Field(
        default="user",
        description="Role given to newly registered users"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Auth Endpoint Paths
    # -------------------------------------------------------------------------

    LOGIN_PATH: str = "/login"
    LOGOUT_PATH: str = "/logout"
    RENEW_PATH: str = "/renew"
    SIGNUP_PATH: str = "/signup"
    REGISTER_PATH: str = "/register"
    PASSWORD_RESET_PATH: str = "/password-reset"
    PASSWORD_UPDATE_PATH: str = "/password-update"

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
    def prefixes(self) -> Prefixes:
        """Auth endpoint paths grouped for the route table."""
        return Prefixes(
            login=self.LOGIN_PATH,
            logout=self.LOGOUT_PATH,
            renew=self.RENEW_PATH,
            signup=self.SIGNUP_PATH,
            register_path=self.REGISTER_PATH,
            password_reset=self.PASSWORD_RESET_PATH,
            password_update=self.PASSWORD_UPDATE_PATH,
        )

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


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
