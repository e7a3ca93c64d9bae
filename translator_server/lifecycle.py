"""
Process lifecycle: store connection, HTTP listener and graceful shutdown.

Shutdown runs RUNNING -> DRAINING -> STORE_CLOSING -> EXITED. Every trigger
(SIGINT, SIGTERM, an uncaught exception, an unhandled asynchronous failure)
goes through ``LifecycleManager.shutdown``. A timer started on the first
trigger forces the process out with status 1 if EXITED is not reached in
time.
"""

import asyncio
import os
import signal
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Callable, List, Optional

import uvicorn
from fastapi import FastAPI

from translator_server.api.app import create_app
from translator_server.config.config import Config
from translator_server.database.connection import DatabaseManager, close_database, init_database
from translator_server.utils.logging import lifecycle_logger as logger

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownState(Enum):
    RUNNING = "running"
    DRAINING = "draining"
    STORE_CLOSING = "store_closing"
    EXITED = "exited"


class ManagedServer(uvicorn.Server):
    """uvicorn server whose signals are owned by the lifecycle manager."""

    def __init__(self, config: uvicorn.Config, on_started: Optional[Callable[[], None]] = None):
        super().__init__(config)
        self.on_started = on_started

    def install_signal_handlers(self) -> None:
        pass

    @contextmanager
    def capture_signals(self):
        yield

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started and self.on_started is not None:
            self.on_started()


class LifecycleManager:
    """Owns startup and the single shutdown routine of the server process."""

    def __init__(self, config: Config, app: Optional[FastAPI] = None,
                 db_manager: Optional[DatabaseManager] = None, server=None,
                 exit_func: Callable[[int], None] = os._exit):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config.database)
        self.app = app or create_app(config, self.db_manager)
        self.app.state.store_managed_externally = True
        self.server = server or ManagedServer(
            uvicorn.Config(
                self.app,
                host=config.server.host,
                port=config.server.port,
                lifespan="off",
                access_log=False,
                log_level=config.monitoring.log_level.lower()
            ),
            on_started=self._log_ready
        )
        self.exit_func = exit_func

        self.state = ShutdownState.RUNNING
        self.history: List[ShutdownState] = [ShutdownState.RUNNING]
        self.shutdown_reason: Optional[str] = None
        self.exit_code = 0

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._force_timer: Optional[threading.Timer] = None
        self._previous_loop_handler = None
        self._previous_thread_hook = None

    async def run(self) -> int:
        """Serve until shut down; returns the process exit status."""
        self._loop = asyncio.get_running_loop()
        self._install_handlers()
        try:
            # The listener binds while the store is still connecting.
            connecting = asyncio.ensure_future(init_database(self.db_manager))

            try:
                await self.server.serve()
            except SystemExit as e:
                # uvicorn exits this way when the listener cannot bind.
                self.exit_code = e.code if isinstance(e.code, int) else 1
                logger.error("HTTP server exited during startup", event="server_exit",
                             metadata={"exit_code": self.exit_code})
                self.shutdown("serverExit")
            except Exception as e:
                logger.error(f"Uncaught Exception: {str(e)}", event="uncaught_exception", exc_info=True)
                self.shutdown("uncaughtException")

            if self.state is ShutdownState.RUNNING:
                self.shutdown("serverStopped")

            if not connecting.done():
                connecting.cancel()
            await asyncio.gather(connecting, return_exceptions=True)

            logger.info("HTTP server closed", event="server_closed")
            await self._close_store()
            return self.exit_code
        finally:
            self._restore_handlers()

    def shutdown(self, reason: str):
        """Begin graceful shutdown; ``reason`` is only used for logging."""
        if self.state is not ShutdownState.RUNNING:
            logger.warning(
                f"{reason} received while shutdown is already {self.state.value}",
                event="shutdown_repeated",
                metadata={"reason": reason, "state": self.state.value}
            )
            return

        logger.info(
            f"{reason} received. Starting graceful shutdown...",
            event="shutdown_started",
            metadata={"reason": reason}
        )
        self.shutdown_reason = reason
        self._transition(ShutdownState.DRAINING)
        self._start_force_timer()
        # uvicorn stops accepting, then waits for open connections to finish.
        self.server.should_exit = True

    async def _close_store(self):
        self._transition(ShutdownState.STORE_CLOSING)
        await close_database(self.db_manager)
        self._transition(ShutdownState.EXITED)
        self._cancel_force_timer()

    def _transition(self, state: ShutdownState):
        self.state = state
        self.history.append(state)
        logger.shutdown_step(state.value, self.shutdown_reason or "")

    def _start_force_timer(self):
        timeout = self.config.server.shutdown_timeout_seconds
        self._force_timer = threading.Timer(timeout, self._force_exit)
        # Runs off the event loop so a stuck loop cannot delay it.
        self._force_timer.daemon = True
        self._force_timer.start()

    def _cancel_force_timer(self):
        if self._force_timer is not None:
            self._force_timer.cancel()
            self._force_timer = None

    def _force_exit(self):
        if self.state is ShutdownState.EXITED:
            return
        logger.error(
            "Could not close connections in time, forcefully shutting down",
            event="forced_exit",
            metadata={
                "state": self.state.value,
                "timeout_seconds": self.config.server.shutdown_timeout_seconds
            }
        )
        self.exit_func(1)

    def _log_ready(self):
        if self.state is not ShutdownState.RUNNING:
            return
        host, port = self.config.server.host, self.config.server.port
        logger.info(
            f"Server is running on http://{host}:{port}",
            event="server_ready",
            metadata={
                "health_check": f"http://{host}:{port}/api/health",
                "environment": self.config.environment
            }
        )

    def _install_handlers(self):
        for sig in HANDLED_SIGNALS:
            try:
                self._loop.add_signal_handler(sig, self.shutdown, sig.name)
            except (NotImplementedError, RuntimeError, ValueError):
                # No loop signal support (Windows) or not on the main thread.
                try:
                    signal.signal(sig, self._handle_signal)
                except ValueError:
                    logger.warning(f"Cannot install handler for {sig.name}", event="signal_handler_skipped")

        self._previous_loop_handler = self._loop.get_exception_handler()
        self._loop.set_exception_handler(self._handle_loop_exception)

        self._previous_thread_hook = threading.excepthook
        threading.excepthook = self._handle_thread_exception

    def _restore_handlers(self):
        for sig in HANDLED_SIGNALS:
            try:
                self._loop.remove_signal_handler(sig)
            except (NotImplementedError, RuntimeError, ValueError):
                pass

        self._loop.set_exception_handler(self._previous_loop_handler)
        if self._previous_thread_hook is not None:
            threading.excepthook = self._previous_thread_hook

    def _handle_signal(self, signum, frame):
        self._call_in_loop(self.shutdown, signal.Signals(signum).name)

    def _handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: dict):
        exc = context.get("exception")
        if isinstance(exc, ConnectionError):
            # A client dropping its socket is not a process fault.
            logger.warning(f"Connection error: {context.get('message')}", event="connection_error")
            return

        logger.error(
            f"Unhandled Rejection: {context.get('message')}",
            event="unhandled_rejection",
            metadata={"reason": repr(exc) if exc is not None else None},
            exc_info=exc if exc is not None else False
        )
        self.shutdown("unhandledRejection")

    def _handle_thread_exception(self, args):
        if issubclass(args.exc_type, SystemExit):
            return
        thread_name = args.thread.name if args.thread is not None else "unknown"
        logger.error(
            f"Uncaught Exception in thread {thread_name}: {args.exc_value}",
            event="uncaught_exception",
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback)
        )
        self._call_in_loop(self.shutdown, "uncaughtException")

    def _call_in_loop(self, callback, *args):
        if self._loop is None or self._loop.is_closed():
            callback(*args)
            return
        self._loop.call_soon_threadsafe(callback, *args)
