"""
Application Configuration Module

Pydantic Settings for type-safe configuration of the catalog browser.

Every value can be set from an environment variable of the same name
(case-insensitive) or from a local .env file:

- PORT, HOST: where the server listens
- DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD: MySQL location
- DB_CONNECTION_LIMIT, DB_POOL_TIMEOUT: connection pool bounds
- DB_TIMEZONE: session time zone applied to date/time columns
- DATABASE_URL: full SQLAlchemy URL, overrides the DB_* location
- API_KEY, REVIEWS_API_URL: NYT Books review API access
- LOG_LEVEL, DEBUG: diagnostics

Usage:
    from bookbrowser.config import get_settings

    settings = get_settings()
    print(settings.db_name)
"""

import re
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_REVIEWS_API_URL = "https://api.nytimes.com/svc/books/v3/reviews.json"

TIMEZONE_OFFSET_PATTERN = re.compile(r"[+-]\d{2}:\d{2}")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Database credentials have no defaults: an unset DB_USER connects as
    the driver's default user, exactly like an unconfigured client would.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Book Catalog",
        description="Application name displayed in page titles and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo, detailed errors, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=3000,
        description="Port to bind the server to (first CLI argument wins)"
    )

    # -------------------------------------------------------------------------
    # Database Settings
    # -------------------------------------------------------------------------
    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides the DB_* location settings"
    )
    db_host: str = Field(default="localhost", description="MySQL host")
    db_port: int = Field(default=3306, description="MySQL port")
    db_name: str = Field(default="goodreads", description="Database (schema) name")
    db_user: Optional[str] = Field(default=None, description="Database user")
    db_password: Optional[str] = Field(default=None, description="Database password")
    db_connection_limit: int = Field(
        default=4,
        ge=1,
        description="Maximum number of pooled database connections"
    )
    db_pool_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait for a free pooled connection"
    )
    db_timezone: str = Field(
        default="+08:00",
        description="Session time zone applied to date/time values"
    )

    # -------------------------------------------------------------------------
    # Review API Settings
    # -------------------------------------------------------------------------
    api_key: str = Field(
        default="",
        description="NYT Books API key (sent as-is, even when empty)"
    )
    reviews_api_url: str = Field(
        default=DEFAULT_REVIEWS_API_URL,
        description="Endpoint of the book reviews API"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def sqlalchemy_url(self) -> "str | URL":
        """
        URL handed to create_engine().

        DATABASE_URL is used verbatim when present. Otherwise a MySQL URL
        is assembled from the DB_* settings with URL.create(), which takes
        care of quoting special characters in the password.
        """
        if self.database_url:
            return self.database_url
        return URL.create(
            "mysql+pymysql",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate that log_level is a valid Python logging level.

        Raises:
            ValueError: If log level is invalid
        """
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("db_timezone")
    @classmethod
    def validate_db_timezone(cls, v: str) -> str:
        """Accept MySQL offset notation such as +08:00 or -05:30."""
        if not TIMEZONE_OFFSET_PATTERN.fullmatch(v):
            raise ValueError("db_timezone must look like +08:00")
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    The first call reads the environment (and .env), later calls return the
    same instance. Tests call get_settings.cache_clear() after changing the
    environment.
    """
    return Settings()
