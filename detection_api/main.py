"""Main module entrypoint for local runtime execution.

This module validates startup configuration, configures logging and serves
the API until a termination signal completes a graceful shutdown.
"""

from detection_api.bootstrap import bootstrap_create_lifecycle_manager
from detection_api.config import config_configure_logging, config_load_settings


def main() -> None:
    """Run the HTTP server with validated startup configuration.

    Returns:
        None: This function exits the process with the shutdown exit code.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        StartupError: Raised when the listening socket cannot be bound.
    """

    settings = config_load_settings()
    config_configure_logging(settings.log_level)
    lifecycle_manager = bootstrap_create_lifecycle_manager(settings)
    raise SystemExit(lifecycle_manager.lifecycle_run())


if __name__ == "__main__":
    main()
