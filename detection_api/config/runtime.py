"""Immutable runtime context captured once at process startup."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone

from .settings import AppSettings


@dataclass(frozen=True)
class RuntimeContext:
    """Startup snapshot shared read-only by every request handler.

    Attributes:
        settings: Validated runtime settings.
        started_at_utc: Wall-clock start instant in UTC.
        started_monotonic: Monotonic clock reading taken at start.
    """

    settings: AppSettings
    started_at_utc: datetime
    started_monotonic: float

    def runtime_uptime_seconds(self) -> float:
        """Return elapsed seconds since the context was created.

        Returns:
            float: Non-negative uptime in seconds.
        """

        return max(0.0, time.monotonic() - self.started_monotonic)


def config_create_runtime_context(settings: AppSettings) -> RuntimeContext:
    """Capture the runtime context for the current process.

    Args:
        settings: Validated runtime settings.

    Returns:
        RuntimeContext: Frozen startup snapshot.

    Raises:
        ValueError: Raised when settings is None.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    return RuntimeContext(
        settings=settings,
        started_at_utc=datetime.now(timezone.utc),
        started_monotonic=time.monotonic(),
    )
