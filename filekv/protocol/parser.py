"""
Protocol Parser Module

This module handles parsing of raw protocol requests and formatting of
responses.

Requests are scanned with fixed ceilings on every token, so an oversized
request is truncated rather than rejected:

    <command:9> <key:99> <value:BUFFER_SIZE-1, rest of line>
"""

import os
from typing import Optional, Tuple

from .commands import CommandType, Request, Response, ResponseStatus
from .errors import (
    MalformedRequestError,
    MissingKeyError,
    MissingValueError,
    UnknownCommandError,
)
from ..config.settings import settings

# Same set as C isspace()
WHITESPACE = b" \t\n\r\x0b\x0c"

COMMANDS = {
    b"SET": CommandType.SET,
    b"GET": CommandType.GET,
    b"DEL": CommandType.DEL,
}


def _skip_whitespace(data: bytes, pos: int) -> int:
    while pos < len(data) and data[pos] in WHITESPACE:
        pos += 1
    return pos


def _scan_word(data: bytes, pos: int, limit: int) -> Tuple[Optional[bytes], int]:
    """Read at most ``limit`` non-whitespace bytes after leading whitespace."""
    start = _skip_whitespace(data, pos)
    end = start
    while end < len(data) and end - start < limit and data[end] not in WHITESPACE:
        end += 1
    if end == start:
        return None, start
    return data[start:end], end


def _scan_line(data: bytes, pos: int, limit: int) -> Tuple[Optional[bytes], int]:
    """Read at most ``limit`` bytes up to (not including) the next newline."""
    start = _skip_whitespace(data, pos)
    newline = data.find(b"\n", start)
    end = len(data) if newline == -1 else newline
    end = min(end, start + limit)
    if end == start:
        return None, start
    return data[start:end], end


class ProtocolParser:
    """
    Parser for the filekv text protocol.

    Protocol Format:
        Request:  <COMMAND> <key> [value...]
        Response: OK | OK\\n<content> | NOTFOUND | ERROR: <message>, newline-terminated

    Commands:
        SET <key> <value...>  -> OK | ERROR: invalid key | ERROR: could not create
        GET <key>             -> OK\\n<content> | NOTFOUND | ERROR: invalid key
        DEL <key>             -> OK | ERROR: invalid key

    Constraints:
        - Command names are case-sensitive
        - Command token: max 9 bytes, key: max 99 bytes
        - Value: rest of the line, max BUFFER_SIZE - 1 bytes, may contain spaces
    """

    def __init__(self):
        """Initialize the parser with ceilings from settings."""
        self.max_command_length = settings.MAX_COMMAND_LENGTH
        self.max_key_length = settings.MAX_KEY_LENGTH
        self.max_value_length = settings.max_value_length

    def parse_request(self, data: bytes) -> Request:
        """
        Parse a raw request buffer into a Request.

        Args:
            data: Raw bytes as read from the client

        Returns:
            A populated Request. Key validity is not checked here.

        Raises:
            MalformedRequestError: no command token
            UnknownCommandError: command is not SET, GET or DEL
            MissingKeyError: GET or DEL without a key
            MissingValueError: SET without a value

        Examples:
            >>> parser = ProtocolParser()
            >>> req = parser.parse_request(b"SET greeting hello world\\n")
            >>> req.command == CommandType.SET
            True
            >>> req.key
            'greeting'
            >>> req.value
            b'hello world'
        """
        # Anything after a NUL byte is invisible, as with a C string
        raw = data.split(b"\0", 1)[0]

        command_token, pos = _scan_word(raw, 0, self.max_command_length)
        if command_token is None:
            raise MalformedRequestError(raw)

        command = COMMANDS.get(command_token, CommandType.INVALID)
        if command == CommandType.INVALID:
            raise UnknownCommandError(raw)

        key_token, pos = _scan_word(raw, pos, self.max_key_length)
        value = None
        if key_token is not None:
            value, pos = _scan_line(raw, pos, self.max_value_length)

        if command in (CommandType.GET, CommandType.DEL) and key_token is None:
            raise MissingKeyError(raw)
        if command == CommandType.SET and value is None:
            raise MissingValueError(raw)

        return Request(
            command=command,
            key=os.fsdecode(key_token),
            value=value if command == CommandType.SET else b"",
            raw=raw,
        )

    def format_response(self, response: Response) -> bytes:
        """
        Format a Response object into wire bytes.

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_response(Response.ok())
            b'OK\\n'
            >>> parser.format_response(Response.value_response(b"hello"))
            b'OK\\nhello\\n'
            >>> parser.format_response(Response.error("invalid key"))
            b'ERROR: invalid key\\n'
        """
        if response.status == ResponseStatus.ERROR:
            return f"ERROR: {response.message}\n".encode()

        head = response.status.value.encode() + b"\n"
        if response.value is not None:
            return head + response.value + b"\n"
        return head
