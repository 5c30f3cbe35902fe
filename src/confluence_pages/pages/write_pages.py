"""Creating and updating Confluence pages from Markdown.

Both operations render Markdown to storage HTML, send one JSON request and
return the raw response body. Unlike listing, any 2xx status is accepted.
"""

import logging
from typing import Any, Dict, Optional

from ..confluence_client.auth import Credentials, require_credentials
from ..confluence_client.errors import ApiError
from ..confluence_client.http_client import ConfluenceHttpClient, open_client
from ..confluence_client.query_builder import BODY_FORMAT, pages_url
from ..content_converter.markdown_converter import MarkdownConverter
from ..models.write_request import CreatePageRequest, PageWriteResult, UpdatePageRequest

logger = logging.getLogger(__name__)


def _storage_body(html: str) -> Dict[str, str]:
    return {'representation': BODY_FORMAT, 'value': html}


def _bool_param(value: bool) -> str:
    return 'true' if value else 'false'


def validate_write_response(operation: str, status_code: int, body: str) -> PageWriteResult:
    """Accept the whole 2xx range for create and update.

    Raises:
        ApiError: For any status outside 200-299
    """
    body = body or ""
    if status_code < 200 or status_code >= 300:
        logger.error(f"Confluence {operation} failed: status={status_code} body={body}")
        raise ApiError(status_code, body)
    return PageWriteResult(status_code=status_code, value=body)


class _PageWriter:
    def __init__(
        self,
        converter: Optional[MarkdownConverter] = None,
        http_client: Optional[ConfluenceHttpClient] = None,
    ):
        self.converter = converter or MarkdownConverter()
        self.http_client = http_client

    def _credentials_for(self, request) -> Credentials:
        return require_credentials(request.server_url, request.username, request.api_token)


class PageCreator(_PageWriter):
    """Creates pages through POST /wiki/api/v2/pages."""

    def build_payload(self, request: CreatePageRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'spaceId': request.space_id,
            'title': request.title,
        }
        if request.status is not None:
            payload['status'] = request.status
        if request.parent_id is not None:
            payload['parentId'] = request.parent_id
        if request.subtype is not None:
            payload['subtype'] = request.subtype
        payload['body'] = _storage_body(self.converter.markdown_to_xhtml(request.markdown))
        return payload

    def create(self, request: CreatePageRequest) -> PageWriteResult:
        """Create a page.

        Raises:
            ConfigurationError: Missing credentials or page fields
            ConversionError: Markdown could not be rendered
            TransportError: Network-level failure
            ApiError: Non-2xx response
        """
        credentials = self._credentials_for(request)
        request.validate()

        params = {
            'embedded': _bool_param(request.embedded),
            'private': _bool_param(request.make_private),
            'root-level': _bool_param(request.root_level),
        }
        logger.info(f"Creating page '{request.title}' in space {request.space_id}")
        payload = self.build_payload(request)
        with open_client(credentials, self.http_client) as http_client:
            status_code, body = http_client.post_json(
                pages_url(credentials.url), payload, params=params,
            )
        return validate_write_response('create', status_code, body)


class PageUpdater(_PageWriter):
    """Updates pages through PUT /wiki/api/v2/pages/{id}."""

    def build_payload(self, request: UpdatePageRequest) -> Dict[str, Any]:
        version_info = request.version_info or {}
        payload: Dict[str, Any] = {
            'version': {
                'number': version_info['number'],
                'message': version_info['message'],
            },
            'body': _storage_body(self.converter.markdown_to_xhtml(request.markdown)),
            'id': request.page_id,
            'status': request.status,
            'title': request.title,
        }
        if request.space_id is not None:
            payload['spaceId'] = request.space_id
        if request.parent_id is not None:
            payload['parentId'] = request.parent_id
        if request.owner_id is not None:
            payload['ownerId'] = request.owner_id
        return payload

    def update(self, request: UpdatePageRequest) -> PageWriteResult:
        """Update a page.

        Raises:
            ConfigurationError: Missing credentials, page fields or version info
            ConversionError: Markdown could not be rendered
            TransportError: Network-level failure
            ApiError: Non-2xx response
        """
        credentials = self._credentials_for(request)
        request.validate()

        logger.info(f"Updating page {request.page_id}")
        payload = self.build_payload(request)
        with open_client(credentials, self.http_client) as http_client:
            status_code, body = http_client.put_json(
                pages_url(credentials.url, request.page_id), payload,
            )
        return validate_write_response('update', status_code, body)
