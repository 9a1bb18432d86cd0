"""Process lifecycle management: bind, serve, and drain on termination signals.

States advance `STARTING -> LISTENING -> SHUTTING_DOWN -> STOPPED`. SIGINT
and SIGTERM run the same shutdown routine: stop accepting connections, let
in-flight requests finish, then return the configured exit code.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import socket
from enum import Enum
from types import FrameType

import uvicorn
from fastapi import FastAPI

from detection_api.config import RuntimeContext
from detection_api.domain import StartupError

from .network import network_resolve_local_ipv4

logger = logging.getLogger(__name__)

BANNER_WIDTH = 50


class LifecycleState(str, Enum):
    """Lifecycle states of the listening server."""

    STARTING = "starting"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class _LifecycleServer(uvicorn.Server):
    """uvicorn server reporting start and signal events to its lifecycle manager."""

    def __init__(self, config: uvicorn.Config, manager: LifecycleManager):
        super().__init__(config)
        self._manager = manager

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            self._manager.lifecycle_mark_listening()

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        # Captured signals are not re-raised after serve() returns, so both
        # signals end in the same exit path.
        _ = frame
        if self.should_exit and sig == signal.SIGINT:
            self.force_exit = True
            return
        self._manager.lifecycle_begin_shutdown(sig)
        self.should_exit = True


class LifecycleManager:
    """Own the listening socket and the uvicorn server for one process run."""

    def __init__(self, application: FastAPI, context: RuntimeContext, shutdown_exit_code: int = 0):
        """Initialize lifecycle manager.

        Args:
            application: ASGI application to serve.
            context: Runtime context with host, port and environment settings.
            shutdown_exit_code: Exit code returned after a signal-driven shutdown.

        Raises:
            ValueError: Raised when application or context is None.
        """

        if application is None:
            raise ValueError("application must not be None")
        if context is None:
            raise ValueError("context must not be None")
        self._application = application
        self._context = context
        self._shutdown_exit_code = shutdown_exit_code
        self._state = LifecycleState.STARTING
        self._listener: socket.socket | None = None
        self._server: _LifecycleServer | None = None
        self._network_address = "localhost"
        self._serve_started = False

    @property
    def state(self) -> LifecycleState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def bound_port(self) -> int | None:
        """Return the port of the bound listener, or None before binding."""

        if self._listener is None:
            return None
        return self._listener.getsockname()[1]

    def lifecycle_bind(self) -> socket.socket:
        """Bind the listening socket on the configured host and port.

        Returns:
            socket.socket: Bound listening socket.

        Raises:
            StartupError: Raised when the address cannot be bound.
            RuntimeError: Raised when the listener was already bound.
        """

        if self._listener is not None:
            raise RuntimeError("listener is already bound")

        settings = self._context.settings
        address_family = socket.AF_INET6 if ":" in settings.application_host else socket.AF_INET
        try:
            listener = socket.create_server(
                (settings.application_host, settings.application_port),
                family=address_family,
            )
        except OSError as error:
            raise StartupError(
                f"Unable to bind {settings.application_host}:{settings.application_port}: {error.strerror or error}"
            ) from error
        self._listener = listener
        return listener

    async def lifecycle_serve(self) -> int:
        """Serve requests until a termination signal completes shutdown.

        Returns:
            int: Configured shutdown exit code.

        Raises:
            StartupError: Raised when binding or server startup fails.
            RuntimeError: Raised when the manager has already been run.
        """

        if self._serve_started:
            raise RuntimeError("lifecycle manager can only be run once")
        self._serve_started = True

        settings = self._context.settings
        self._network_address = network_resolve_local_ipv4()
        listener = self._listener or self.lifecycle_bind()

        config = uvicorn.Config(
            self._application,
            host=settings.application_host,
            port=settings.application_port,
            log_config=None,
            access_log=False,
            server_header=False,
        )
        self._server = _LifecycleServer(config=config, manager=self)
        await self._server.serve(sockets=[listener])

        if self._state is LifecycleState.STARTING:
            listener.close()
            raise StartupError("HTTP server failed to start")
        self._state = LifecycleState.STOPPED
        logger.info("HTTP server closed")
        return self._shutdown_exit_code

    def lifecycle_run(self) -> int:
        """Run the server on a fresh event loop and return the exit code."""

        return asyncio.run(self.lifecycle_serve())

    def lifecycle_request_shutdown(self, sig: int = signal.SIGTERM) -> None:
        """Request graceful shutdown as if `sig` had been delivered.

        Args:
            sig: Signal number reported in the shutdown log line.

        Raises:
            RuntimeError: Raised when the server has not been created yet.
        """

        if self._server is None:
            raise RuntimeError("server is not running")
        self._server.handle_exit(sig, None)

    def lifecycle_begin_shutdown(self, sig: int) -> None:
        """Record a shutdown request; repeated requests are ignored."""

        if self._state in (LifecycleState.SHUTTING_DOWN, LifecycleState.STOPPED):
            return
        self._state = LifecycleState.SHUTTING_DOWN
        logger.info("%s signal received: closing HTTP server", _signal_name(sig))

    def lifecycle_mark_listening(self) -> None:
        """Enter the listening state and log the operator banner."""

        if self._state is not LifecycleState.STARTING:
            return
        self._state = LifecycleState.LISTENING
        for banner_line in self.lifecycle_banner_lines():
            logger.info(banner_line)

    def lifecycle_banner_lines(self) -> list[str]:
        """Return the startup banner shown once the server is listening."""

        settings = self._context.settings
        port = settings.application_port
        started_at = self._context.started_at_utc.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")
        return [
            "=" * BANNER_WIDTH,
            f"Server running on all interfaces ({settings.application_host}:{port})",
            f"Local: http://localhost:{port}",
            f"Network: http://{self._network_address}:{port}",
            f"API Health check: http://{self._network_address}:{port}/api/health",
            f"Environment: {settings.environment_label}",
            f"Started at: {started_at}",
            "=" * BANNER_WIDTH,
        ]


def _signal_name(sig: int) -> str:
    try:
        return signal.Signals(sig).name
    except ValueError:
        return f"Signal {sig}"
