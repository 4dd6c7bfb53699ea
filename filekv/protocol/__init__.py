"""Protocol module for filekv."""

from .commands import CommandType, Request, Response, ResponseStatus
from .dispatcher import CommandDispatcher
from .errors import (
    MalformedRequestError,
    MissingKeyError,
    MissingValueError,
    ProtocolError,
    UnknownCommandError,
)
from .parser import ProtocolParser
from .validation import is_valid_key

__all__ = [
    "CommandType",
    "Request",
    "Response",
    "ResponseStatus",
    "CommandDispatcher",
    "ProtocolError",
    "MalformedRequestError",
    "UnknownCommandError",
    "MissingKeyError",
    "MissingValueError",
    "ProtocolParser",
    "is_valid_key",
]
