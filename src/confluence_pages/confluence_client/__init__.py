"""Confluence REST API v2 client pieces.

Provides the exception hierarchy, credential handling and the HTTP
transport used by the page operations.
"""

from .errors import (
    ConfluencePagesError,
    ConfigurationError,
    ConfluenceError,
    ApiError,
    TransportError,
    ConversionError,
    SerializationError,
)
from .auth import Authenticator, Credentials, require_credentials
from .http_client import ConfluenceHttpClient, open_client, sanitize_credentials

__all__ = [
    "ConfluencePagesError",
    "ConfigurationError",
    "ConfluenceError",
    "ApiError",
    "TransportError",
    "ConversionError",
    "SerializationError",
    "Authenticator",
    "Credentials",
    "require_credentials",
    "ConfluenceHttpClient",
    "open_client",
    "sanitize_credentials",
]
