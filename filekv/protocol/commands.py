"""
Protocol Command and Response Definitions

This module defines the data structures for protocol requests and responses.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class CommandType(Enum):
    """Enumeration of supported command types."""
    INVALID = auto()
    SET = auto()
    GET = auto()
    DEL = auto()


class ResponseStatus(Enum):
    """Enumeration of response statuses."""
    OK = "OK"
    NOTFOUND = "NOTFOUND"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Request:
    """
    Represents a parsed protocol request.

    Attributes:
        command: The type of command (SET, GET, DEL, INVALID)
        key: The key for the operation, decoded with the filesystem encoding
        value: The raw value bytes for SET operations (empty otherwise)
        raw: The raw bytes the request was parsed from
    """
    command: CommandType
    key: str = ""
    value: bytes = b""
    raw: bytes = b""


@dataclass
class Response:
    """
    Represents a protocol response.

    Attributes:
        status: OK, NOTFOUND or ERROR
        message: Error description (ERROR responses only)
        value: The stored content returned by GET
    """
    status: ResponseStatus
    message: str = ""
    value: Optional[bytes] = None

    @classmethod
    def ok(cls) -> "Response":
        """Create a bare OK response for SET and DEL."""
        return cls(status=ResponseStatus.OK)

    @classmethod
    def value_response(cls, value: bytes) -> "Response":
        """Create a GET response carrying stored content."""
        return cls(status=ResponseStatus.OK, value=value)

    @classmethod
    def not_found(cls) -> "Response":
        """Create a NOTFOUND response for GET on an absent key."""
        return cls(status=ResponseStatus.NOTFOUND)

    @classmethod
    def error(cls, message: str) -> "Response":
        """Create an error response."""
        return cls(status=ResponseStatus.ERROR, message=message)

    @classmethod
    def invalid_key(cls) -> "Response":
        return cls.error("invalid key")

    @classmethod
    def invalid_command(cls) -> "Response":
        return cls.error("invalid command")

    @classmethod
    def could_not_create(cls) -> "Response":
        return cls.error("could not create")
