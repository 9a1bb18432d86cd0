"""JSON response envelope builders.

Every builder stamps a fresh `timestamp` at construction time so the value
always reflects the instant the response was produced.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Final

SERVER_NAME: Final[str] = "Deepfake Detection API"
SERVER_VERSION: Final[str] = "1.0.0"
HEALTHY_STATUS: Final[str] = "healthy"
NOT_FOUND_LABEL: Final[str] = "Not Found"


def domain_utc_timestamp(moment: datetime | None = None) -> str:
    """Render an ISO-8601 UTC instant with millisecond precision.

    Args:
        moment: Optional instant to render; defaults to now.

    Returns:
        str: Timestamp such as `2026-10-19T08:15:30.123Z`.
    """

    resolved_moment = moment or datetime.now(timezone.utc)
    return resolved_moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def domain_build_health_payload(uptime_seconds: float, environment: str) -> dict[str, Any]:
    """Build the health-check payload."""

    return {
        "status": HEALTHY_STATUS,
        "timestamp": domain_utc_timestamp(),
        "uptime": float(uptime_seconds),
        "environment": environment,
    }


def domain_build_info_payload(port: int, runtime_version: str, platform_name: str) -> dict[str, Any]:
    """Build the server information payload.

    Args:
        port: Configured listening port.
        runtime_version: Interpreter version string.
        platform_name: Operating system platform identifier.

    Returns:
        dict[str, Any]: Server identification payload.
    """

    return {
        "server": SERVER_NAME,
        "version": SERVER_VERSION,
        "port": port,
        "runtimeVersion": runtime_version,
        "platform": platform_name,
        "timestamp": domain_utc_timestamp(),
    }


def domain_build_not_found_payload(method: str, path: str) -> dict[str, Any]:
    """Build the envelope for an unmatched method and path."""

    return {
        "error": NOT_FOUND_LABEL,
        "message": f"Route {method} {path} does not exist",
        "timestamp": domain_utc_timestamp(),
    }


def domain_build_error_payload(label: str, message: str, stack: str | None = None) -> dict[str, Any]:
    """Build the envelope for a failed request.

    Args:
        label: Short error category such as `Internal Server Error`.
        message: Human-readable failure message.
        stack: Optional formatted traceback; omitted from the payload when None.

    Returns:
        dict[str, Any]: Error envelope payload.
    """

    payload: dict[str, Any] = {"error": label, "message": message}
    if stack is not None:
        payload["stack"] = stack
    payload["timestamp"] = domain_utc_timestamp()
    return payload
