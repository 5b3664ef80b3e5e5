"""
Bridge lifecycle - startup ordering, shutdown and guaranteed store closure.

Manifesto:
    The bridge must never serve requests without a ready store, and must
    never exit without releasing it.  ``BlogBridge.run()`` owns both
    guarantees: it connects, registers, attaches the transport, and closes
    the connector in a ``finally`` that every exit path goes through.

Architecture:
    ::

        CREATED ──► CONNECTING ──ok──► SERVING ──shutdown / EOF / crash──► SHUTTING_DOWN ──► TERMINATED
                         │                                                      ▲
                         └──────────────── connect failed ──────────────────────┘

    Shutdown is an explicit ``asyncio.Event``.  ``run()`` waits on the
    transport task and the event together; whichever finishes first decides
    the exit path.  Signal handlers (SIGINT/SIGTERM) only set the event, so
    tests drive shutdown by calling ``request_shutdown()``.

Exit codes:
    0  shutdown requested, or the transport closed its channel
    1  startup failed (store unreachable, registration error) or the
       transport crashed

Tags:
    lifecycle, shutdown, signals, asyncio, blogmcp
"""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable
from enum import Enum

from mcp.server.fastmcp import FastMCP

from blogmcp.core.errors import categorize_error, is_retryable
from blogmcp.core.settings import BridgeSettings
from blogmcp.core.transports.mcp import Transport, attach_transport
from blogmcp.framework.logging import get_logger
from blogmcp.mcp.server import create_server
from blogmcp.store.connector import StoreConnector

logger = get_logger(__name__)

ServerFactory = Callable[[StoreConnector, BridgeSettings], FastMCP]

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class LifecycleState(str, Enum):
    """Process-level state of the bridge."""

    CREATED = "created"
    CONNECTING = "connecting"
    SERVING = "serving"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class BlogBridge:
    """Owns the connector and sequences startup and shutdown.

    Args:
        settings: Bridge configuration
        connector: Store connector; built from ``settings`` when omitted
        transport: Coroutine function serving the MCP server; defaults to
            ``attach_transport`` (stdio or streamable-http per settings)
        server_factory: Builds the FastMCP server against the connector
        shutdown_grace_seconds: How long to wait for the transport to stop
            after cancellation before closing the store anyway
    """

    def __init__(
        self,
        settings: BridgeSettings,
        connector: StoreConnector | None = None,
        transport: Transport | None = None,
        server_factory: ServerFactory = create_server,
        shutdown_grace_seconds: float = 5.0,
    ) -> None:
        self.settings = settings
        self.connector = connector or StoreConnector(settings)
        self.server: FastMCP | None = None
        self._transport = transport or attach_transport
        self._server_factory = server_factory
        self._grace = shutdown_grace_seconds
        self._shutdown = asyncio.Event()
        self._state = LifecycleState.CREATED
        self._installed_signals: list[signal.Signals] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    def _set_state(self, state: LifecycleState) -> None:
        logger.debug("bridge.state", previous=self._state.value, state=state.value)
        self._state = state

    # ── Shutdown channel ──────────────────────────────────────────

    def request_shutdown(self) -> None:
        """Ask a running bridge to stop. Safe to call more than once."""
        self._shutdown.set()

    def _on_signal(self, signum: signal.Signals) -> None:
        logger.info("bridge.signal_received", signal=signum.name)
        self.request_shutdown()

    def install_signal_handlers(self) -> None:
        """Route SIGINT/SIGTERM to ``request_shutdown`` on the running loop."""
        loop = asyncio.get_running_loop()
        for sig in SHUTDOWN_SIGNALS:
            try:
                loop.add_signal_handler(sig, self._on_signal, sig)
            except NotImplementedError:
                # Proactor loop: KeyboardInterrupt still unwinds through run()
                logger.debug("bridge.signal_unsupported", signal=sig.name)
                continue
            self._installed_signals.append(sig)

    def _remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._installed_signals:
            loop.remove_signal_handler(sig)
        self._installed_signals.clear()

    # ── Run ───────────────────────────────────────────────────────

    async def run(self, *, handle_signals: bool = False) -> int:
        """Connect, serve until shutdown, close the store. Returns the exit code."""
        if handle_signals:
            self.install_signal_handlers()

        try:
            self._set_state(LifecycleState.CONNECTING)
            try:
                await self.connector.connect()
                self.server = self._server_factory(self.connector, self.settings)
            except Exception as e:
                self._set_state(LifecycleState.SHUTTING_DOWN)
                logger.error(
                    "bridge.startup_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                    category=categorize_error(e).value,
                    retryable=is_retryable(e),
                )
                return 1

            self._set_state(LifecycleState.SERVING)
            logger.info("bridge.started", server=self.settings.server_name, transport=self.settings.transport)
            return await self._serve(self.server)
        finally:
            if self._state is not LifecycleState.SHUTTING_DOWN:
                self._set_state(LifecycleState.SHUTTING_DOWN)
            await self.connector.close()
            if self._installed_signals:
                self._remove_signal_handlers()
            self._set_state(LifecycleState.TERMINATED)
            logger.info("bridge.terminated")

    async def _serve(self, server: FastMCP) -> int:
        transport_task = asyncio.create_task(self._transport(server, self.settings), name="mcp-transport")
        shutdown_task = asyncio.create_task(self._shutdown.wait(), name="bridge-shutdown")

        try:
            done, _ = await asyncio.wait({transport_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            transport_task.cancel()
            shutdown_task.cancel()
            raise

        if transport_task not in done:
            self._set_state(LifecycleState.SHUTTING_DOWN)
            logger.info("bridge.shutting_down", reason="shutdown_requested")
            await self._stop_transport(transport_task)
            return 0

        shutdown_task.cancel()
        await asyncio.gather(shutdown_task, return_exceptions=True)
        self._set_state(LifecycleState.SHUTTING_DOWN)

        if transport_task.cancelled():
            logger.info("bridge.shutting_down", reason="transport_cancelled")
            return 0

        exc = transport_task.exception()
        if exc is not None:
            logger.error(
                "bridge.transport_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                category=categorize_error(exc).value,
            )
            return 1

        logger.info("bridge.shutting_down", reason="transport_closed")
        return 0

    async def _stop_transport(self, transport_task: asyncio.Task) -> None:
        transport_task.cancel()
        done, _ = await asyncio.wait({transport_task}, timeout=self._grace)
        if not done:
            # stdio reads block in a worker thread until the next line or EOF
            logger.warning("bridge.transport_stop_timeout", grace_seconds=self._grace)
            return
        if not transport_task.cancelled() and transport_task.exception() is not None:
            exc = transport_task.exception()
            logger.warning("bridge.transport_stop_error", error=str(exc), error_type=type(exc).__name__)
