"""Typed exception hierarchy for Confluence page operations.

All exceptions inherit from ConfluencePagesError so callers can catch any
application-level failure in one place. Each carries enough context
(status codes, response bodies, endpoints) to diagnose the failure without
re-running the request.
"""

from typing import Optional


class ConfluencePagesError(Exception):
    """Base exception for all confluence-pages errors."""
    pass


class ConfigurationError(ConfluencePagesError):
    """Raised when required configuration is missing or invalid.

    Always raised before any network activity takes place.
    """

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class ConfluenceError(ConfluencePagesError):
    """Base exception for errors talking to Confluence."""
    pass


class ApiError(ConfluenceError):
    """Raised when Confluence answers with an unexpected HTTP status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Confluence API returned {status_code}")
        self.status_code = status_code
        self.body = body


class TransportError(ConfluenceError):
    """Raised when the request never got an HTTP answer (DNS, TCP, TLS)."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"API is not reachable at {endpoint}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class ConversionError(ConfluenceError):
    """Raised when content conversion between formats fails."""

    def __init__(self, message: str):
        super().__init__(message)


class SerializationError(ConfluencePagesError):
    """Raised when a page cannot be written to a storage sink."""

    def __init__(self, title: str, reason: str):
        super().__init__(f"Failed to serialize page '{title}': {reason}")
        self.title = title
        self.reason = reason
