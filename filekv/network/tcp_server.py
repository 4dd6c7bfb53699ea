"""
TCP Server Module

This module implements the sequential TCP server for filekv.

One connection is accepted, served to completion and closed before the
next accept. The only cancellation point is the shutdown flag, which is
checked before every accept and after an accept that was interrupted or
timed out. Python transparently restarts system calls interrupted by a
signal whose handler returns, so accept() runs with a short timeout to
keep the flag check a real poll point.
"""

import logging
import socket
import threading
from typing import Any, Dict, Optional, Tuple

from ..config.settings import settings
from ..protocol.dispatcher import CommandDispatcher
from ..protocol.parser import ProtocolParser
from ..storage.base import StorageAdapter
from ..storage.filesystem import FileStorage
from .connection import Connection

logger = logging.getLogger(__name__)


class KVServer:
    """
    Blocking, single-threaded TCP server for the filekv service.

    Usage:
        server = KVServer(host='0.0.0.0', port=5000)
        server.bind()
        server.serve_forever()  # Until request_shutdown() is called

    Attributes:
        host: Server bind address (e.g., '0.0.0.0')
        port: Server port number (0 picks a free port at bind time)
        storage: The StorageAdapter every request is dispatched to
        parser: The ProtocolParser for requests and responses
        dispatcher: The CommandDispatcher wrapping storage
    """

    def __init__(
            self,
            host: str = None,
            port: int = None,
            storage: StorageAdapter = None,
            backlog: int = None,
            shutdown_event: threading.Event = None,
    ):
        """
        Initialize the server.

        Args:
            host: Bind address (default from settings)
            port: Port number (default from settings)
            storage: StorageAdapter (FileStorage on settings.DATA_DIR if not provided)
            backlog: Listen backlog (default from settings)
            shutdown_event: Flag to stop the accept loop (a new one if not provided)
        """
        self.host = host if host is not None else settings.HOST
        self.port = port if port is not None else settings.PORT
        self.backlog = backlog if backlog is not None else settings.LISTEN_BACKLOG
        self.storage = storage if storage is not None else FileStorage(settings.DATA_DIR)
        self.parser = ProtocolParser()
        self.dispatcher = CommandDispatcher(self.storage)

        self._shutdown = shutdown_event if shutdown_event is not None else threading.Event()
        self._socket: Optional[socket.socket] = None
        self._running = False
        self._connection_count = 0
        self._responses_sent = 0
        self._connection_errors = 0

    @property
    def address(self) -> Tuple[str, int]:
        """The (host, port) actually bound."""
        if self._socket is None:
            return self.host, self.port
        return self._socket.getsockname()[:2]

    def bind(self) -> None:
        """
        Create the listening socket.

        Raises:
            OSError: if the socket cannot be created, bound or put in listen mode
        """
        if self._socket is not None:
            return

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(self.backlog)
            sock.settimeout(settings.ACCEPT_POLL_INTERVAL)
        except OSError:
            sock.close()
            raise

        self._socket = sock
        self.port = sock.getsockname()[1]
        logger.info(f"Listening on {self.host}:{self.port}")

    def serve_forever(self) -> None:
        """
        Accept and serve connections one at a time until shutdown is requested.

        The listening socket is closed when the loop ends.
        """
        self.bind()
        self._running = True
        try:
            while not self._shutdown.is_set():
                try:
                    client, addr = self._socket.accept()
                except (socket.timeout, InterruptedError):
                    continue
                except OSError as exc:
                    if self._shutdown.is_set():
                        break
                    logger.error(f"Error accepting connection: {exc}")
                    continue

                self._handle(client, addr)
        finally:
            self._running = False
            self.close()
            logger.info("Server stopped accepting connections")

    def _handle(self, client: socket.socket, addr: Any) -> None:
        self._connection_count += 1
        logger.debug(f"Client connected: {addr}")
        client.settimeout(settings.CONNECTION_TIMEOUT)
        conn = Connection(client, addr, self.parser, self.dispatcher)
        try:
            if conn.serve():
                self._responses_sent += 1
            else:
                self._connection_errors += 1
        except Exception as exc:  # Log unexpected errors but keep server alive
            self._connection_errors += 1
            logger.exception(f"Error handling client {addr}: {exc}")

    def request_shutdown(self) -> None:
        """Ask the accept loop to stop. Safe to call from a signal handler."""
        self._shutdown.set()

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown.is_set()

    def close(self) -> None:
        """Close the listening socket."""
        if self._socket is None:
            return
        try:
            self._socket.close()
        finally:
            self._socket = None

    def is_running(self) -> bool:
        """Check if the accept loop is currently running."""
        return self._running

    def get_stats(self) -> Dict[str, Any]:
        """
        Get server statistics.

        Returns:
            Dictionary with connection and response counts.
        """
        return {
            "running": self._running,
            "host": self.host,
            "port": self.port,
            "total_connections": self._connection_count,
            "responses_sent": self._responses_sent,
            "connection_errors": self._connection_errors,
        }
