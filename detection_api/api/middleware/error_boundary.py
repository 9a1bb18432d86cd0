"""Interceptor routing errors raised below it to the central error handler."""

from __future__ import annotations

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from detection_api.api.errors import api_error_response
from detection_api.config import AppSettings


class ErrorBoundaryMiddleware:
    """Translate errors from inner interceptors and handlers into JSON envelopes.

    Errors raised after the response has started cannot be rewritten and are
    re-raised to the server.
    """

    def __init__(self, app: ASGIApp, settings: AppSettings):
        if settings is None:
            raise ValueError("settings must not be None")
        self.app = app
        self._settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_and_track(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_and_track)
        except Exception as error:
            if response_started:
                raise
            response = api_error_response(error, self._settings)
            await response(scope, receive, send)
