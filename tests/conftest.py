"""Root pytest configuration for all tests."""

from unittest.mock import Mock

import pytest

from confluence_pages.confluence_client.auth import Credentials
from confluence_pages.confluence_client.http_client import ConfluenceHttpClient
from tests.fixtures import API_TOKEN, SERVER_URL, USERNAME


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real CONFLUENCE_* variables and .env files out of the tests."""
    for name in ("CONFLUENCE_URL", "CONFLUENCE_USER", "CONFLUENCE_API_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def credentials():
    return Credentials(url=SERVER_URL, user=USERNAME, api_token=API_TOKEN)


@pytest.fixture
def mock_http():
    """A ConfluenceHttpClient double returning 200 with an empty result set."""
    client = Mock(spec=ConfluenceHttpClient)
    client.get.return_value = (200, '{"results": []}')
    client.post_json.return_value = (200, '{"id": "1"}')
    client.put_json.return_value = (200, '{"id": "1"}')
    return client
