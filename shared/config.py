"""
Shared configuration management for the Epic auth bridge.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = Field(default="local", validation_alias=AliasChoices("ACCESS_ENV", "env"))
    log_level: str = Field(default="info", validation_alias=AliasChoices("ACCESS_LOG_LEVEL", "LOG_LEVEL", "log_level"))

    # Outbound HTTP
    http_timeout: float = Field(default=10.0, validation_alias=AliasChoices("HTTP_TIMEOUT", "http_timeout"))

    # Server
    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))
    port: int = Field(default=8787, validation_alias=AliasChoices("PORT", "port"))
