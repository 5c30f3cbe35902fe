"""URL construction for the Confluence v2 pages endpoints."""

from typing import Dict, Iterable, Optional
from urllib.parse import quote_plus

from .auth import require_credentials
from ..models.list_request import ListRequest

PAGES_PATH = "/wiki/api/v2/pages"
BODY_FORMAT = "storage"


def pages_url(server_url: str, page_id: Optional[str] = None) -> str:
    """Return the pages endpoint, stripping one trailing slash from server_url."""
    base = server_url[:-1] if server_url.endswith('/') else server_url
    url = base + PAGES_PATH
    if page_id is not None:
        url += f"/{quote_plus(str(page_id))}"
    return url


def _join(values: Iterable) -> str:
    return ','.join(str(v) for v in values)


def build_list_params(request: ListRequest) -> Dict[str, Optional[str]]:
    """Return the list query parameters in wire order, blanks included."""
    return {
        'space-ids': _join(request.space_ids) if request.space_ids else None,
        'page-ids': _join(request.page_ids) if request.page_ids else None,
        'title': request.title,
        'subtype': request.subtype,
        'sort': request.sort,
        'cursor': request.cursor,
        'status': _join(request.status),
        'limit': str(request.effective_limit),
        'body-format': BODY_FORMAT,
    }


def encode_query(params: Dict[str, Optional[str]]) -> str:
    """Form-encode parameters, dropping any whose value is None or blank."""
    return '&'.join(
        f"{quote_plus(key)}={quote_plus(value)}"
        for key, value in params.items()
        if value is not None and value.strip()
    )


def build_list_url(request: ListRequest) -> str:
    """Build the full GET URL for listing pages.

    Raises:
        ConfigurationError: If server_url, username or api_token is blank
    """
    credentials = require_credentials(request.server_url, request.username, request.api_token)

    url = pages_url(credentials.url)
    query = encode_query(build_list_params(request))
    if query:
        url += '?' + query
    return url
