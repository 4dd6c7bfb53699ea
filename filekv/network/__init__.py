"""Network module for filekv."""

from .connection import Connection, ConnectionState, write_all
from .tcp_server import KVServer

__all__ = ["Connection", "ConnectionState", "KVServer", "write_all"]
