"""
Exceptions raised or reported by s3item.

Configuration and redirect problems are raised to the caller. Failed requests
are handed to the ``on_error`` callback as ``RequestFailed`` instances.
"""

from typing import Any, Dict, Optional

import httpx


class S3ItemError(Exception):
    """Base exception for all s3item errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class ConfigurationError(S3ItemError, ValueError):
    """
    Raised when an item is built with bad input.

    Covers empty bucket or key, unknown option names, and option values that
    fail validation. Raised before any network call is made.

    Attributes:
        errors: Validation details, when pydantic produced them
    """

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class RedirectError(S3ItemError):
    """
    Raised when a redirect cannot be followed.

    Attributes:
        location: The Location header value, if any
    """

    def __init__(self, message: str, location: Optional[str] = None):
        super().__init__(message)
        self.location = location


class RequestFailed(S3ItemError):
    """
    A logical operation ended without success.

    Attributes:
        method: HTTP method of the last attempt
        url: URL of the last attempt
        response: Last HTTP response, if one was delivered
    """

    def __init__(
        self,
        message: str,
        method: str,
        url: str,
        response: Optional[httpx.Response] = None,
    ):
        super().__init__(message)
        self.method = method
        self.url = url
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "method": self.method,
            "url": self.url,
            "status_code": self.status_code,
        }


class RetriesExhausted(RequestFailed):
    """Transient error status received with no retries left."""


class TransportFailed(RequestFailed):
    """No HTTP response was delivered; the httpx error is the ``__cause__``."""
