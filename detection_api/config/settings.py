"""Typed runtime settings with dotenv support and startup validation."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_APPLICATION_PORT = 5000
DEFAULT_BODY_LIMIT_BYTES = 10 * 1024 * 1024
DEFAULT_ENVIRONMENT_LABEL = "development"


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for the HTTP server runtime.

    Environment variable names map to field names in uppercase unless an
    alias list is declared on the field.

    Attributes:
        environment_name: Runtime environment label read from `APP_ENV`,
            `NODE_ENV` or `ENVIRONMENT_NAME`. `None` when unset.
        application_host: Host interface for socket binding.
        application_port: Listening port read from `PORT` or `APPLICATION_PORT`.
        log_level: Root logging level name.
        static_directory: Directory served by the static file interceptor.
        body_limit_bytes: Maximum accepted JSON or form body size.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        frozen=True,
    )

    environment_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("APP_ENV", "NODE_ENV", "ENVIRONMENT_NAME"),
    )
    application_host: str = Field(default="0.0.0.0", min_length=1)
    application_port: int = Field(
        default=DEFAULT_APPLICATION_PORT,
        ge=0,
        le=65535,
        validation_alias=AliasChoices("PORT", "APPLICATION_PORT"),
    )
    log_level: str = Field(default="INFO")
    static_directory: str = Field(default="public", min_length=1)
    body_limit_bytes: int = Field(default=DEFAULT_BODY_LIMIT_BYTES, ge=1)

    @field_validator("environment_name", mode="before")
    @classmethod
    def _normalize_environment_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            stripped_value = value.strip()
            return stripped_value or None
        return value

    @field_validator("application_port", mode="before")
    @classmethod
    def _default_blank_port(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_APPLICATION_PORT
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized_value), int):
            raise ValueError(f"unknown log level: {value}")
        return normalized_value

    @property
    def environment_label(self) -> str:
        """Return the environment name shown to operators and API clients."""

        return self.environment_name or DEFAULT_ENVIRONMENT_LABEL

    @property
    def environment_is_development(self) -> bool:
        """Return whether development diagnostics were explicitly requested.

        An unset environment displays as `development` but does not enable
        development-only diagnostics such as stack traces in error bodies.
        """

        return self.environment_name == "development"


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
