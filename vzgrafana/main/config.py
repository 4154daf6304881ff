"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vzgrafana.shared import DEFAULT_MIDDLEWARE_URL, EnumEnvironment, EnumLogLevel


class VolkszaehlerSettings(BaseSettings):
    """Volkszaehler middleware configuration settings."""

    api_url: str = Field(
        default=DEFAULT_MIDDLEWARE_URL, description="Volkszaehler middleware URL"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Middleware request timeout in seconds"
    )
    detect_endpoint: bool = Field(
        default=True,
        description="Check the URL at startup and append /middleware.php if needed",
    )

    model_config = SettingsConfigDict(
        env_prefix="VZ_", case_sensitive=False, extra="ignore"
    )


class ServerSettings(BaseSettings):
    """HTTP server configuration settings."""

    title: str = Field(default="Volkszaehler Grafana Datasource", description="Title")
    description: str = Field(
        default="Grafana SimpleJSON datasource for the volkszaehler middleware",
        description="Description",
    )
    version: str = Field(default="1.0.0", description="Version")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    debug: bool = Field(
        default=False, description="Log request, response and middleware bodies"
    )
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVER_", case_sensitive=False, extra="ignore"
    )


class QuerySettings(BaseSettings):
    """Query fan-out configuration settings."""

    max_concurrency: int = Field(
        default=8, ge=1, description="Maximum targets fetched concurrently per query"
    )
    refresh_cache_on_startup: bool = Field(
        default=True, description="Load entity names when the application starts"
    )

    model_config = SettingsConfigDict(
        env_prefix="QUERY_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    volkszaehler: VolkszaehlerSettings = Field(default_factory=VolkszaehlerSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    query: QuerySettings = Field(default_factory=QuerySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()
