"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


def deep_freeze(value: Any) -> Any:
    """Recursively convert mutable containers into hashable equivalents."""
    if isinstance(value, dict):
        return tuple(sorted((k, deep_freeze(v)) for k, v in value.items()))
    elif isinstance(value, (list, tuple)):
        return tuple(deep_freeze(v) for v in value)
    elif isinstance(value, set):
        return frozenset(deep_freeze(v) for v in value)
    else:
        return value  # primitive types are already hashable


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(default=["GET", "POST", "OPTIONS"])
    allow_headers: list[str] = Field(default=["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default="logs/app.log", description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./advocates.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=5, description="Maximum pool overflow")
    pool_timeout: int = Field(default=10, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables_on_startup: bool = Field(
        default=True, description="Create missing tables when the API starts"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Resolve the database password.

        A mounted secrets file wins over an environment variable; when neither
        is configured the password embedded in the URL (if any) is used.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if not password:
                raise ValueError(
                    f"Environment variable {self.password_env_var} not set"
                )
            return password

        from sqlalchemy.engine import make_url

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        if base_url.get_backend_name() == "sqlite":
            return self.url

        resolved_password = self.password
        if resolved_password and resolved_password != base_url.password:
            if base_url.password:
                logger.warning(
                    "Database password from secrets does not match the one in the URL. "
                    "Using password from secrets."
                )
            base_url = base_url.set(password=resolved_password)

        # Render manually to avoid SQLAlchemy's password masking
        return base_url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class ApiConfig(BaseModel):
    """HTTP API behaviour configuration."""

    prefix: str = Field(default="/api", description="Path prefix for API routes")
    default_page_size: int = Field(
        default=10, description="Page size used when no limit is requested"
    )
    max_page_size: int = Field(
        default=100, description="Largest limit a client may request"
    )


class ClientConfig(BaseModel):
    """Configuration for the advocates HTTP client and search state."""

    base_url: str = Field(
        default="http://localhost:8000", description="Base URL of the advocates API"
    )
    timeout_seconds: float = Field(default=10.0, description="HTTP request timeout")
    stale_time_seconds: float = Field(
        default=60.0, description="Seconds a cached response is considered fresh"
    )
    gc_time_seconds: float = Field(
        default=300.0, description="Seconds an unused cached response is kept"
    )
    cache_size: int = Field(default=128, description="Maximum cached queries")
    debounce_ms: int = Field(
        default=300, description="Search input debounce delay in milliseconds"
    )
    page_size: int = Field(default=10, description="Rows requested per page")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root configuration model that matches the config.yaml structure."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database configuration"
    )
    api: ApiConfig = Field(default_factory=ApiConfig, description="API configuration")
    client: ClientConfig = Field(
        default_factory=ClientConfig, description="Client configuration"
    )
    app: AppConfig = Field(
        default_factory=AppConfig, description="Application configuration"
    )
