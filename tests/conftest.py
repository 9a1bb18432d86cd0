"""Shared pytest fixtures isolating tests from host environment settings."""

import pytest

_SETTINGS_ENVIRONMENT_VARIABLES = (
    "APP_ENV",
    "NODE_ENV",
    "ENVIRONMENT_NAME",
    "PORT",
    "APPLICATION_PORT",
    "APPLICATION_HOST",
    "LOG_LEVEL",
    "STATIC_DIRECTORY",
    "BODY_LIMIT_BYTES",
)


@pytest.fixture(autouse=True)
def _clear_settings_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove settings variables so each test controls its own configuration."""

    for variable_name in _SETTINGS_ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(variable_name, raising=False)
