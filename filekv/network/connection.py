"""
Connection Handler Module

Serves exactly one request on one client socket:

    READING -> PARSING -> DISPATCHING -> RESPONDING -> CLOSED

The socket is closed on every path, including read failures and
unexpected errors.
"""

import logging
import socket
from enum import Enum, auto
from typing import Any, Optional

from ..config.settings import settings
from ..protocol.commands import Request, Response
from ..protocol.dispatcher import CommandDispatcher
from ..protocol.errors import ProtocolError
from ..protocol.parser import ProtocolParser

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Lifecycle of a single client connection."""
    READING = auto()
    PARSING = auto()
    DISPATCHING = auto()
    RESPONDING = auto()
    CLOSED = auto()


def write_all(sock: socket.socket, data: bytes) -> int:
    """
    Send every byte of data, resuming after partial writes.

    A send interrupted by a signal is retried; any other OSError is
    raised to the caller.

    Returns:
        Number of bytes written (always len(data))
    """
    view = memoryview(data)
    while view:
        try:
            sent = sock.send(view)
        except InterruptedError:
            continue
        view = view[sent:]
    return len(data)


class Connection:
    """
    One-shot request/response exchange with a connected client.

    Usage:
        conn = Connection(client_sock, addr, parser, dispatcher)
        conn.serve()

    Attributes:
        sock: The client socket, owned by this object
        address: Peer address for logging
        state: Current ConnectionState
        request: The parsed Request, once parsing succeeded
        response: The bytes sent (or attempted) to the client
    """

    def __init__(
            self,
            sock: socket.socket,
            address: Any,
            parser: ProtocolParser,
            dispatcher: CommandDispatcher,
    ):
        self.sock = sock
        self.address = address
        self.parser = parser
        self.dispatcher = dispatcher
        self.read_size = settings.BUFFER_SIZE - 1

        self.state = ConnectionState.READING
        self.request: Optional[Request] = None
        self.response: Optional[bytes] = None

    def serve(self) -> bool:
        """
        Run the full request cycle and close the socket.

        Returns:
            True if a complete response was written, False otherwise
        """
        try:
            data = self._read()
            if data is None:
                return False

            self.state = ConnectionState.PARSING
            try:
                self.request = self.parser.parse_request(data)
            except ProtocolError as exc:
                logger.debug(f"Rejected request from {self.address}: {exc.message} (raw={exc.raw!r})")
                return self._respond(Response.error(exc.message))

            self.state = ConnectionState.DISPATCHING
            logger.debug(f"{self.request.command.name} {self.request.key!r} from {self.address} (raw={self.request.raw!r})")
            return self._respond(self.dispatcher.dispatch(self.request))
        finally:
            self.close()

    def _read(self) -> Optional[bytes]:
        try:
            data = self.sock.recv(self.read_size)
        except OSError as exc:
            logger.warning(f"Read from {self.address} failed: {exc}")
            return None
        if not data:
            logger.warning(f"Client {self.address} closed before sending a request")
            return None
        return data

    def _respond(self, response: Response) -> bool:
        self.state = ConnectionState.RESPONDING
        self.response = self.parser.format_response(response)
        try:
            write_all(self.sock, self.response)
        except OSError as exc:
            logger.warning(f"Write to {self.address} failed: {exc}")
            return False
        return True

    def close(self) -> None:
        """Release the client socket. Safe to call more than once."""
        if self.state == ConnectionState.CLOSED:
            return
        self.state = ConnectionState.CLOSED
        try:
            self.sock.close()
        except OSError as exc:
            logger.debug(f"Error closing connection {self.address}: {exc}")
