"""
Pytest Configuration and Fixtures

This module provides shared fixtures and helpers for all tests.
"""

import socket
import threading
import time
from contextlib import closing
from typing import Generator, List, Optional

import pytest

from filekv.network.tcp_server import KVServer
from filekv.protocol.dispatcher import CommandDispatcher
from filekv.protocol.parser import ProtocolParser
from filekv.storage.base import StorageAdapter
from filekv.storage.filesystem import FileStorage
from filekv.storage.memory import MemoryStorage


def find_free_port() -> int:
    """Find an available port for testing."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(('127.0.0.1', 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


def send_command(host: str, port: int, command, timeout: float = 5.0) -> bytes:
    """
    Open a connection, send one request and return everything the server sent.

    Args:
        command: Request as str or bytes (sent as-is, no newline added)

    Returns:
        Raw response bytes (b"" if the server closed without answering)
    """
    if isinstance(command, str):
        command = command.encode()

    with socket.create_connection((host, port), timeout=timeout) as sock:
        if command:
            sock.sendall(command)
        sock.shutdown(socket.SHUT_WR)

        chunks = []
        while True:
            chunk = sock.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


# ============================================================================
# Test doubles
# ============================================================================

class RecordingStorage(MemoryStorage):
    """MemoryStorage that records every call made to it."""

    def __init__(self):
        super().__init__()
        self.calls: List[tuple] = []

    def write(self, key, data):
        self.calls.append(("write", key, data))
        super().write(key, data)

    def read(self, key, limit=None):
        self.calls.append(("read", key, limit))
        return super().read(key, limit)

    def delete(self, key):
        self.calls.append(("delete", key))
        return super().delete(key)


class FailingStorage(StorageAdapter):
    """Storage whose every operation fails with an OSError."""

    def write(self, key, data):
        raise PermissionError(13, "Permission denied", key)

    def read(self, key, limit=None):
        raise IsADirectoryError(21, "Is a directory", key)

    def delete(self, key):
        raise PermissionError(13, "Permission denied", key)


class FakeSocket:
    """
    Minimal stand-in for a connected client socket.

    send_plan lists what successive send() calls do: an int caps how many
    bytes are accepted, an exception instance is raised. Once the plan is
    exhausted, send() accepts everything.
    """

    def __init__(
            self,
            incoming: bytes = b"",
            recv_error: Optional[BaseException] = None,
            send_plan: Optional[list] = None,
    ):
        self.incoming = incoming
        self.recv_error = recv_error
        self.send_plan = list(send_plan or [])
        self.sent = bytearray()
        self.recv_sizes: List[int] = []
        self.send_calls = 0
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def recv(self, size: int) -> bytes:
        self.recv_sizes.append(size)
        if self.recv_error is not None:
            raise self.recv_error
        data, self.incoming = self.incoming[:size], self.incoming[size:]
        return data

    def send(self, data) -> int:
        self.send_calls += 1
        step = self.send_plan.pop(0) if self.send_plan else None
        if isinstance(step, BaseException):
            raise step
        chunk = bytes(data) if step is None else bytes(data[:step])
        self.sent += chunk
        return len(chunk)

    def close(self) -> None:
        self.close_calls += 1


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Create an empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def recording_storage() -> RecordingStorage:
    """Create an in-memory storage that records calls."""
    return RecordingStorage()


@pytest.fixture
def file_storage(tmp_path) -> FileStorage:
    """Create a FileStorage rooted in a fresh temporary directory."""
    return FileStorage(tmp_path / "data")


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a ProtocolParser instance."""
    return ProtocolParser()


@pytest.fixture
def dispatcher(memory_storage: MemoryStorage) -> CommandDispatcher:
    """Create a dispatcher over in-memory storage."""
    return CommandDispatcher(memory_storage)


# ============================================================================
# Server Fixtures
# ============================================================================

@pytest.fixture
def server(file_storage: FileStorage) -> Generator[KVServer, None, None]:
    """
    Create and start a server instance for testing.

    This fixture:
    1. Binds a KVServer on a free loopback port
    2. Runs its accept loop in a background thread
    3. Yields the server for testing
    4. Requests shutdown and waits for the loop to exit
    """
    srv = KVServer(host='127.0.0.1', port=0, storage=file_storage)
    srv.bind()

    thread = threading.Thread(target=srv.serve_forever, daemon=True)
    thread.start()

    deadline = time.monotonic() + 5
    while not srv.is_running() and time.monotonic() < deadline:
        time.sleep(0.01)

    yield srv

    srv.request_shutdown()
    thread.join(timeout=5)


@pytest.fixture
def client(server: KVServer):
    """
    One-shot request function bound to the running test server.

    Usage:
        def test_something(client):
            assert client("GET key\\n") == b"NOTFOUND\\n"
    """
    host, port = server.address

    def send(command) -> bytes:
        return send_command(host, port, command)
    return send


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
