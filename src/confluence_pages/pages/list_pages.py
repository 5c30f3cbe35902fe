"""Listing Confluence pages as Markdown.

PageListingClient runs a single linear pipeline per call:
build query, GET, check status, parse JSON, convert each page, then hand
the pages back inline or stream them to storage depending on fetch mode.
"""

import json
import logging
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import parse_qs, urlsplit

from ..confluence_client.auth import require_credentials
from ..confluence_client.errors import ApiError, ConfigurationError, ConfluenceError
from ..confluence_client.http_client import ConfluenceHttpClient, open_client
from ..confluence_client.query_builder import BODY_FORMAT, build_list_url
from ..content_converter.markdown_converter import MarkdownConverter
from ..models.list_request import FetchMode, ListRequest
from ..models.list_result import ListResult, PageList, StoredPages
from ..models.page import Page
from ..storage.page_sink import PageSink
from ..storage.storage import StorageService
from .page_converter import convert_page

logger = logging.getLogger(__name__)


class PageListingClient:
    """Lists pages through GET /wiki/api/v2/pages.

    Attributes:
        storage: Storage service used in STREAM_TO_STORAGE mode
        converter: HTML -> Markdown converter
        http_client: Optional transport; one is built from the request's
            credentials when omitted

    Example:
        >>> client = PageListingClient(storage=LocalFileStorage("./out"))
        >>> result = client.list(ListRequest(url, user, token, space_ids=[42]))
        >>> for page in result.pages:
        ...     print(page.title)
    """

    def __init__(
        self,
        storage: Optional[StorageService] = None,
        converter: Optional[MarkdownConverter] = None,
        http_client: Optional[ConfluenceHttpClient] = None,
        temp_dir: Optional[str] = None,
    ):
        self.storage = storage
        self.converter = converter or MarkdownConverter()
        self.http_client = http_client
        self.temp_dir = temp_dir

    def list(self, request: ListRequest) -> ListResult:
        """Fetch one batch of pages.

        Raises:
            ConfigurationError: Missing credentials, or STREAM_TO_STORAGE
                without a storage service
            TransportError: Network-level failure
            ApiError: Any status other than 200
        """
        url = build_list_url(request)
        if request.fetch_mode is FetchMode.STREAM_TO_STORAGE and self.storage is None:
            raise ConfigurationError(
                "a storage service is required to stream pages", 'fetch_mode'
            )

        credentials = require_credentials(
            request.server_url, request.username, request.api_token
        )
        logger.info(f"Listing Confluence pages ({request.fetch_mode.value})")
        with open_client(credentials, self.http_client) as http_client:
            status_code, body = http_client.get(url)
        payload = self._parse(validate_list_response(status_code, body))
        next_cursor = extract_next_cursor(payload)

        pages = self._convert_results(payload)
        if request.fetch_mode is FetchMode.STREAM_TO_STORAGE:
            return self._store(pages, next_cursor)

        result = PageList(pages=tuple(pages), next_cursor=next_cursor)
        logger.info(f"Fetched {len(result.pages)} page(s)")
        return result

    def _parse(self, body: str) -> Dict[str, Any]:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise ConfluenceError(f"Invalid JSON in Confluence response: {e}") from e
        if not isinstance(payload, dict):
            raise ConfluenceError(
                f"Unexpected Confluence response: expected an object, got {type(payload).__name__}"
            )
        return payload

    def _convert_results(self, payload: Dict[str, Any]) -> Iterator[Page]:
        results = payload.get('results')
        if not isinstance(results, list):
            return
        for page_json in results:
            if not isinstance(page_json, dict):
                continue
            page = convert_page(page_json, BODY_FORMAT, self.converter)
            if page is not None:
                yield page

    def _store(self, pages: Iterator[Page], next_cursor: Optional[str]) -> StoredPages:
        sink = PageSink(directory=self.temp_dir)
        try:
            with sink:
                for page in pages:
                    sink.write(page)
            uri = self.storage.put_file(sink.path)
        finally:
            sink.discard()

        logger.info(f"Stored {sink.count} page(s) at {uri}")
        return StoredPages(uri=uri, count=sink.count, next_cursor=next_cursor)


def validate_list_response(status_code: int, body: str) -> str:
    """Accept exactly HTTP 200 for the list endpoint.

    Raises:
        ApiError: For any other status, including other 2xx codes
    """
    if status_code != 200:
        logger.error(f"Confluence request failed: status={status_code} body={body}")
        raise ApiError(status_code, body)
    return body


def extract_next_cursor(payload: Dict[str, Any]) -> Optional[str]:
    """Read the opaque cursor from the `_links.next` link, if any."""
    links = payload.get('_links')
    next_link = links.get('next') if isinstance(links, dict) else None
    if not isinstance(next_link, str):
        return None
    cursors: List[str] = parse_qs(urlsplit(next_link).query).get('cursor', [])
    return cursors[0] if cursors else None
