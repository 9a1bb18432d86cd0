"""Process-wide logging setup for operator-facing output."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def config_configure_logging(log_level: str = "INFO") -> None:
    """Install a single stream handler on the root logger.

    Args:
        log_level: Logging level name such as `INFO` or `DEBUG`.

    Returns:
        None: Configures the global logging state as side effect.
    """

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
