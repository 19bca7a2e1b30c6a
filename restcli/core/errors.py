"""Exceptions raised by the restcli core."""

from __future__ import annotations


class RestClientError(Exception):
    """Base class for every error the command layer reports."""


class ConfigurationError(RestClientError):
    """Settings could not be loaded."""


class NotFoundError(RestClientError):
    """Unknown endpoint name."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        message = f"Endpoint '{name}' not found"
        if self.available:
            message += f". Available endpoints: {', '.join(self.available)}"
        super().__init__(message)


class AuthenticationError(RestClientError):
    """Login failed or returned no usable token."""


class RequestError(RestClientError):
    """Non-success HTTP status in raw mode."""

    def __init__(self, status_code: int, reason: str = "", body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        message = f"Request failed with status {status_code}"
        if reason:
            message += f" {reason}"
        if body:
            message += f": {body}"
        super().__init__(message)


class TransportError(RestClientError):
    """Connection-level failure (DNS, refused connection, protocol error)."""


class RequestTimeoutError(TransportError):
    """The request did not complete within the configured timeout."""


class UsageError(RestClientError):
    """Invalid or missing command-line input."""
