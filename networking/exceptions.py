"""Custom exceptions for request transport."""

from typing import Any, Optional


class TransportError(Exception):
    """Base class for errors raised while delivering a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(TransportError):
    """Raised when the remote endpoint answers with HTTP 429."""


class RemoteRejectionError(TransportError):
    """Raised when the remote engine rejects a delivered request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message, status_code)
        self.response = response
