"""
Command Dispatcher Module

Routes a parsed Request to the storage adapter and builds the Response.
Every branch produces a response; storage and validation failures never
escape as exceptions.
"""

import logging

from .commands import CommandType, Request, Response
from .validation import is_valid_key
from ..config.settings import settings
from ..storage.base import StorageAdapter

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Execute requests against a StorageAdapter.

    Attributes:
        storage: The adapter every command is delegated to
        read_limit: Bytes read back from storage for GET
        content_limit: Bytes of stored content echoed in a GET response
    """

    def __init__(self, storage: StorageAdapter):
        self.storage = storage
        self.read_limit = settings.BUFFER_SIZE - 1
        self.content_limit = settings.max_content_length

    def dispatch(self, request: Request) -> Response:
        """
        Execute a request and return its response.

        Args:
            request: A Request produced by ProtocolParser

        Returns:
            Response for the request, never raises for storage errors
        """
        if request.command == CommandType.SET:
            return self._handle_set(request)
        if request.command == CommandType.GET:
            return self._handle_get(request)
        if request.command == CommandType.DEL:
            return self._handle_del(request)
        return Response.invalid_command()

    def _handle_set(self, request: Request) -> Response:
        if not is_valid_key(request.key):
            return Response.invalid_key()
        try:
            self.storage.write(request.key, request.value)
        except OSError as exc:
            logger.warning(f"SET {request.key!r} failed: {exc}")
            return Response.could_not_create()
        return Response.ok()

    def _handle_get(self, request: Request) -> Response:
        if not is_valid_key(request.key):
            return Response.invalid_key()
        try:
            content = self.storage.read(request.key, self.read_limit)
        except OSError as exc:
            logger.warning(f"GET {request.key!r} failed, reporting not found: {exc}")
            content = None
        if content is None:
            return Response.not_found()

        # Content is read once and truncated silently; a NUL ends it early
        content = content.split(b"\0", 1)[0]
        return Response.value_response(content[:self.content_limit])

    def _handle_del(self, request: Request) -> Response:
        if not is_valid_key(request.key):
            return Response.invalid_key()
        try:
            existed = self.storage.delete(request.key)
            logger.debug(f"DEL {request.key!r} (existed={existed})")
        except OSError as exc:
            logger.warning(f"DEL {request.key!r} failed, ignoring: {exc}")
        return Response.ok()
