"""Unit tests for pages.write_pages module."""

import json
import logging
from unittest.mock import Mock, patch

import pytest

from confluence_pages.confluence_client.errors import (
    ApiError,
    ConfigurationError,
    ConversionError,
    TransportError,
)
from confluence_pages.models import CreatePageRequest, UpdatePageRequest
from confluence_pages.pages.write_pages import (
    PageCreator,
    PageUpdater,
    validate_write_response,
)
from tests.fixtures import API_TOKEN, SERVER_URL, USERNAME


@pytest.fixture
def converter():
    """Converter double so the tests never need Pandoc."""
    mock = Mock()
    mock.markdown_to_xhtml.side_effect = lambda md: f"<p>{md}</p>" if md else ""
    return mock


def make_create(**kwargs):
    kwargs.setdefault('server_url', SERVER_URL)
    kwargs.setdefault('username', USERNAME)
    kwargs.setdefault('api_token', API_TOKEN)
    kwargs.setdefault('space_id', "42")
    kwargs.setdefault('title', "New Page")
    kwargs.setdefault('markdown', "Hello")
    return CreatePageRequest(**kwargs)


def make_update(**kwargs):
    kwargs.setdefault('server_url', SERVER_URL)
    kwargs.setdefault('username', USERNAME)
    kwargs.setdefault('api_token', API_TOKEN)
    kwargs.setdefault('page_id', "1001")
    kwargs.setdefault('status', "current")
    kwargs.setdefault('title', "Renamed")
    kwargs.setdefault('markdown', "Body")
    kwargs.setdefault('version_info', {'number': 4, 'message': "sync"})
    return UpdatePageRequest(**kwargs)


class TestValidateWriteResponse:
    """Test cases for validate_write_response."""

    @pytest.mark.parametrize("status_code", [200, 201, 204, 299])
    def test_accepts_2xx(self, status_code):
        result = validate_write_response('create', status_code, '{"id": "5"}')
        assert result.status_code == status_code
        assert result.value == '{"id": "5"}'

    @pytest.mark.parametrize("status_code", [199, 300, 400, 409, 500])
    def test_rejects_everything_else(self, status_code):
        with pytest.raises(ApiError) as exc_info:
            validate_write_response('update', status_code, 'conflict')
        assert exc_info.value.status_code == status_code
        assert exc_info.value.body == 'conflict'

    def test_failure_is_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="confluence_pages"):
            with pytest.raises(ApiError):
                validate_write_response('create', 400, 'bad space')

        assert "create failed" in caplog.text
        assert "status=400" in caplog.text

    def test_missing_body_becomes_empty_string(self):
        assert validate_write_response('create', 204, None).value == ""


class TestPageCreator:
    """Test cases for PageCreator."""

    def test_create_posts_payload_and_params(self, mock_http, converter):
        mock_http.post_json.return_value = (200, '{"id": "77"}')
        creator = PageCreator(converter=converter, http_client=mock_http)

        result = creator.create(make_create(parent_id="9", embedded=True, root_level=True))

        assert result.value == '{"id": "77"}'
        url, payload = mock_http.post_json.call_args.args
        assert url == f"{SERVER_URL}/wiki/api/v2/pages"
        assert payload == {
            'spaceId': "42",
            'title': "New Page",
            'parentId': "9",
            'body': {'representation': 'storage', 'value': "<p>Hello</p>"},
        }
        assert mock_http.post_json.call_args.kwargs['params'] == {
            'embedded': 'true',
            'private': 'false',
            'root-level': 'true',
        }

    def test_optional_fields_are_included_when_set(self, converter):
        payload = PageCreator(converter=converter).build_payload(
            make_create(status="draft", subtype="live")
        )
        assert payload['status'] == "draft"
        assert payload['subtype'] == "live"
        assert list(payload)[-1] == 'body'

    def test_trailing_slash_is_stripped(self, mock_http, converter):
        creator = PageCreator(converter=converter, http_client=mock_http)
        creator.create(make_create(server_url=f"  {SERVER_URL}/ "))
        assert mock_http.post_json.call_args.args[0] == f"{SERVER_URL}/wiki/api/v2/pages"

    def test_empty_markdown_is_allowed(self, mock_http, converter):
        creator = PageCreator(converter=converter, http_client=mock_http)
        creator.create(make_create(markdown=""))
        payload = mock_http.post_json.call_args.args[1]
        assert payload['body']['value'] == ""

    @pytest.mark.parametrize("field_name", ['server_url', 'username', 'api_token'])
    def test_missing_credentials_fail_before_network(self, mock_http, converter, field_name):
        creator = PageCreator(converter=converter, http_client=mock_http)

        with pytest.raises(ConfigurationError) as exc_info:
            creator.create(make_create(**{field_name: ""}))

        assert exc_info.value.config_field == field_name
        mock_http.post_json.assert_not_called()

    @pytest.mark.parametrize("field_name", ['space_id', 'title', 'markdown'])
    def test_missing_page_fields_fail_before_network(self, mock_http, converter, field_name):
        creator = PageCreator(converter=converter, http_client=mock_http)

        with pytest.raises(ConfigurationError):
            creator.create(make_create(**{field_name: None}))

        mock_http.post_json.assert_not_called()
        converter.markdown_to_xhtml.assert_not_called()

    def test_conflict_raises_api_error(self, mock_http, converter):
        mock_http.post_json.return_value = (400, '{"message": "title exists"}')
        creator = PageCreator(converter=converter, http_client=mock_http)

        with pytest.raises(ApiError) as exc_info:
            creator.create(make_create())

        assert "title exists" in exc_info.value.body

    def test_conversion_error_propagates(self, mock_http, converter):
        converter.markdown_to_xhtml.side_effect = ConversionError("Pandoc not found")
        creator = PageCreator(converter=converter, http_client=mock_http)

        with pytest.raises(ConversionError):
            creator.create(make_create())

        mock_http.post_json.assert_not_called()

    def test_transport_error_propagates(self, mock_http, converter):
        mock_http.post_json.side_effect = TransportError(SERVER_URL, "timed out")
        creator = PageCreator(converter=converter, http_client=mock_http)

        with pytest.raises(TransportError):
            creator.create(make_create())

    @patch('confluence_pages.confluence_client.http_client.ConfluenceHttpClient')
    def test_own_transport_is_closed(self, mock_client_class, converter):
        transport = mock_client_class.return_value
        transport.post_json.return_value = (200, '{"id": "77"}')

        PageCreator(converter=converter).create(make_create())

        transport.close.assert_called_once_with()

    def test_injected_transport_stays_open(self, mock_http, converter):
        PageCreator(converter=converter, http_client=mock_http).create(make_create())
        mock_http.close.assert_not_called()


class TestPageUpdater:
    """Test cases for PageUpdater."""

    def test_update_puts_payload_to_page_url(self, mock_http, converter):
        mock_http.put_json.return_value = (200, '{"id": "1001", "version": {"number": 4}}')
        updater = PageUpdater(converter=converter, http_client=mock_http)

        result = updater.update(make_update())

        url, payload = mock_http.put_json.call_args.args
        assert url == f"{SERVER_URL}/wiki/api/v2/pages/1001"
        assert payload == {
            'version': {'number': 4, 'message': "sync"},
            'body': {'representation': 'storage', 'value': "<p>Body</p>"},
            'id': "1001",
            'status': "current",
            'title': "Renamed",
        }
        assert json.loads(result.value)['version']['number'] == 4

    def test_optional_fields_are_included_when_set(self, converter):
        payload = PageUpdater(converter=converter).build_payload(
            make_update(space_id="42", parent_id="9", owner_id="acc-1")
        )
        assert payload['spaceId'] == "42"
        assert payload['parentId'] == "9"
        assert payload['ownerId'] == "acc-1"

    def test_extra_version_keys_are_not_sent(self, converter):
        payload = PageUpdater(converter=converter).build_payload(
            make_update(version_info={'number': 2, 'message': "m", 'authorId': "x"})
        )
        assert payload['version'] == {'number': 2, 'message': "m"}

    @pytest.mark.parametrize("version_info", [
        None,
        {},
        {'number': 3},
        {'message': "only a message"},
    ])
    def test_incomplete_version_info_fails_before_network(self, mock_http, converter, version_info):
        updater = PageUpdater(converter=converter, http_client=mock_http)

        with pytest.raises(ConfigurationError) as exc_info:
            updater.update(make_update(version_info=version_info))

        assert exc_info.value.config_field == 'version_info'
        mock_http.put_json.assert_not_called()

    @pytest.mark.parametrize("field_name", ['page_id', 'status', 'title', 'markdown'])
    def test_missing_page_fields_fail_before_network(self, mock_http, converter, field_name):
        updater = PageUpdater(converter=converter, http_client=mock_http)

        with pytest.raises(ConfigurationError):
            updater.update(make_update(**{field_name: None}))

        mock_http.put_json.assert_not_called()

    def test_stale_version_raises_api_error(self, mock_http, converter):
        mock_http.put_json.return_value = (409, 'Version must be incremented')
        updater = PageUpdater(converter=converter, http_client=mock_http)

        with pytest.raises(ApiError) as exc_info:
            updater.update(make_update())

        assert exc_info.value.status_code == 409

    @patch('confluence_pages.confluence_client.http_client.ConfluenceHttpClient')
    def test_own_transport_is_closed(self, mock_client_class, converter):
        transport = mock_client_class.return_value
        transport.put_json.return_value = (409, 'stale')

        with pytest.raises(ApiError):
            PageUpdater(converter=converter).update(make_update(server_url=f"{SERVER_URL}/"))

        assert transport.put_json.call_args.args[0] == f"{SERVER_URL}/wiki/api/v2/pages/1001"
        transport.close.assert_called_once_with()

    def test_accepts_no_content(self, mock_http, converter):
        mock_http.put_json.return_value = (204, '')
        result = PageUpdater(converter=converter, http_client=mock_http).update(make_update())
        assert result.status_code == 204
        assert result.value == ''
