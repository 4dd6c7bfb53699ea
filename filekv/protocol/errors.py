"""
Protocol Errors

Every parse failure maps to exactly one ERROR response. The message a
client sees is carried on the exception class.
"""


class ProtocolError(Exception):
    """Base class for requests that cannot be turned into a Request."""

    message = "malformed request"

    def __init__(self, raw: bytes = b""):
        super().__init__(self.message)
        self.raw = raw


class MalformedRequestError(ProtocolError):
    """No command token could be read."""

    message = "malformed request"


class UnknownCommandError(ProtocolError):
    """The command token is not SET, GET or DEL."""

    message = "invalid command"


class MissingKeyError(ProtocolError):
    """GET or DEL without a key."""

    message = "missing key"


class MissingValueError(ProtocolError):
    """SET without a value."""

    message = "missing value"
