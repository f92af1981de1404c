"""Error taxonomy for the Keenetic RCI client.

Every failure the client surfaces is a ``RouterError`` subclass so that
callers (the MCP tool surface, a REST façade) can translate it into a
status code with :func:`http_status_for`.
"""

from __future__ import annotations

from typing import Optional


class RouterError(Exception):
    """Base exception for router client errors."""

    pass


class ConfigurationError(RouterError):
    """Raised when the client is constructed with invalid configuration."""

    pass


class ConnectionError(RouterError):
    """Raised when no HTTP response could be obtained from the router."""

    pass


class TimeoutError(RouterError):
    """Raised when a request exceeds the configured timeout."""

    pass


class AuthenticationError(RouterError):
    """Raised when the challenge-response handshake fails."""

    pass


class NotFoundError(RouterError):
    """Raised for HTTP 404 or when a lookup by key finds nothing."""

    pass


class ApiError(RouterError):
    """Raised for non-2xx responses other than 401 and 404."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


_STATUS_BY_ERROR = (
    (ConfigurationError, 500),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (TimeoutError, 504),
    (ConnectionError, 502),
)


def http_status_for(error: RouterError) -> int:
    """Map a router error to the HTTP status a façade should answer with."""
    if isinstance(error, ApiError):
        return error.status_code or 502
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 500
