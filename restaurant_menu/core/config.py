"""
Restaurant Menu Configuration

Every setting comes from the environment (or a .env file) through
pydantic-settings. Three modes are recognised:
    - DEVELOPMENT: Local SQLite database, default secret key accepted
    - STAGING: Real database, production checks enabled
    - PRODUCTION: Real database, production checks enabled

Usage:
    from restaurant_menu.core.config import get_settings

    settings = get_settings()
    database = Database(settings.database_url)

Author: Khalil Bannouri
Version: 1.0.0
"""

import logging
import sys
from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SECRET_KEY = "change-me-restaurant-menu-secret"


class EnvironmentMode(str, Enum):
    """
    Application environment modes.

    Attributes:
        DEVELOPMENT: Local work against SQLite
        PRODUCTION: Live environment
        STAGING: Pre-production environment with production checks
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Menu backend settings.

    Keys are matched case-insensitively against environment variables;
    SECRET_KEY must be overridden outside development.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details

        # Database
        database_url: SQLAlchemy async connection string
        database_echo: Log every SQL statement

        # Admin tokens
        secret_key: HMAC key used to sign admin tokens
        token_algorithm: JWT signing algorithm
        token_expire_minutes: Admin token lifetime

        # Cache
        settings_cache_ttl: Seconds the restaurant settings stay cached
        categories_cache_ttl: Seconds the category listing stays cached
        items_cache_ttl: Seconds a per-category item listing stays cached
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Restaurant Menu",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8001,
        description="API server port"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # ==========================================================================
    # DATABASE
    # ==========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./restaurant_menu.db",
        description="SQLAlchemy async database URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Log all SQL statements"
    )
    seed_on_startup: bool = Field(
        default=True,
        description="Populate default data on startup when the store is empty"
    )

    # ==========================================================================
    # ADMIN TOKENS
    # ==========================================================================

    secret_key: str = Field(
        default=DEFAULT_SECRET_KEY,
        description="Key used to sign admin tokens"
    )
    token_algorithm: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    token_expire_minutes: int = Field(
        default=12 * 60,
        ge=1,
        description="Admin token lifetime in minutes"
    )

    # ==========================================================================
    # CACHE
    # ==========================================================================

    settings_cache_ttl: float = Field(
        default=300.0,
        description="Restaurant settings cache lifetime in seconds"
    )
    categories_cache_ttl: float = Field(
        default=180.0,
        description="Category listing cache lifetime in seconds"
    )
    items_cache_ttl: float = Field(
        default=120.0,
        description="Per-category item listing cache lifetime in seconds"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Convert string to EnvironmentMode enum."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_production_config(self) -> list[str]:
        """
        Validate that all required production settings are configured.

        Returns:
            List of missing or unsafe configuration keys (empty if all good)
        """
        missing = []

        if not self.is_development:
            if not self.secret_key or self.secret_key == DEFAULT_SECRET_KEY:
                missing.append("SECRET_KEY")
            if self.database_url.startswith("sqlite"):
                missing.append("DATABASE_URL")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Settings built once per process from the environment.

    Tests construct Settings directly instead of going through this cache.
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Send all log records to stdout in one column-aligned format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return logging.getLogger("restaurant_menu")
