"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files, Docker ``*_FILE`` secrets and
default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from devices_api import __version__
from devices_api.shared import EnumEnvironment, EnumLogFormat, EnumLogLevel
from devices_api.shared.env import load_secret_file_variables


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/devices",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="devices", description="Name of the MongoDB database"
    )
    timeout_ms: int = Field(
        default=5000,
        gt=0,
        description="Client-side deadline for every MongoDB operation",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class APISettings(BaseSettings):
    """HTTP server configuration settings."""

    title: str = Field(default="Devices API", description="API title")
    description: str = Field(
        default="API for managing devices", description="API description"
    )
    version: str = Field(default=__version__, description="API version")
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8080, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Deadline after which a request is cancelled",
    )

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: Optional[EnumLogFormat] = Field(
        default=None,
        description="Renderer: json or console (default depends on environment)",
    )
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

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
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

    Secret files are resolved first so that ``DB_MONGO_URI_FILE`` and
    friends are visible to the settings classes. Patched in tests.
    """
    load_secret_file_variables()
    return AppSettings()
