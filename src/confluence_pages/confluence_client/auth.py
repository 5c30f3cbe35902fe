"""Credential loading for the Confluence REST API.

Credentials are taken from explicit values first and fall back to
environment variables, loaded from a .env file with python-dotenv.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: str
    api_token: str


def require_credentials(
    url: Optional[str],
    user: Optional[str],
    api_token: Optional[str],
) -> Credentials:
    """Validate that all three credential values are present and non-blank.

    Args:
        url: Confluence site URL (e.g., https://your-domain.atlassian.net)
        user: Account email used for Basic authentication
        api_token: Atlassian API token

    Returns:
        Credentials with surrounding whitespace removed

    Raises:
        ConfigurationError: Naming the first missing value
    """
    for field_name, value in (
        ('server_url', url),
        ('username', user),
        ('api_token', api_token),
    ):
        if value is None or not str(value).strip():
            raise ConfigurationError(f"{field_name} is required", field_name)

    return Credentials(
        url=str(url).strip(),
        user=str(user).strip(),
        api_token=str(api_token).strip(),
    )


class Authenticator:
    """Resolves Confluence credentials from arguments and the environment.

    Environment variables (optionally provided through a .env file):
        CONFLUENCE_URL: Confluence site URL, without /wiki
        CONFLUENCE_USER: Confluence user email address
        CONFLUENCE_API_TOKEN: Confluence API token

    Credentials are never cached or logged.

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials(user="someone@example.com")
    """

    def __init__(self):
        load_dotenv()

    def get_credentials(
        self,
        url: Optional[str] = None,
        user: Optional[str] = None,
        api_token: Optional[str] = None,
    ) -> Credentials:
        """Get credentials, preferring explicit values over the environment.

        Raises:
            ConfigurationError: If any credential is still missing
        """
        return require_credentials(
            url or os.getenv('CONFLUENCE_URL'),
            user or os.getenv('CONFLUENCE_USER'),
            api_token or os.getenv('CONFLUENCE_API_TOKEN'),
        )
