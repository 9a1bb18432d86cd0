"""Health endpoint router reporting liveness and uptime."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from detection_api.config import RuntimeContext
from detection_api.domain import domain_build_health_payload

from .common import ROUTE_METHODS


def api_create_health_router(context: RuntimeContext) -> APIRouter:
    """Create health-check router.

    Args:
        context: Runtime context providing uptime and environment label.

    Returns:
        APIRouter: Router exposing the `/health` endpoint.

    Raises:
        ValueError: Raised when context is None.
    """

    if context is None:
        raise ValueError("context must not be None")

    router = APIRouter(tags=["health"])

    @router.api_route("/health", methods=ROUTE_METHODS)
    @router.api_route("/health/", methods=ROUTE_METHODS, include_in_schema=False)
    def api_health_status() -> JSONResponse:
        """Return liveness, uptime and environment label.

        Returns:
            JSONResponse: HTTP 200 health envelope; this endpoint always succeeds.
        """

        payload = domain_build_health_payload(
            uptime_seconds=context.runtime_uptime_seconds(),
            environment=context.settings.environment_label,
        )
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
