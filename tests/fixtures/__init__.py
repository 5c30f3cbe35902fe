"""Test fixtures for Confluence page tests.

Provides sample storage format pages and helpers that build list endpoint
responses.
"""

from .confluence_credentials import SERVER_URL, USERNAME, API_TOKEN
from .sample_pages import (
    SAMPLE_PAGE_HELLO,
    SAMPLE_PAGE_SIMPLE,
    SAMPLE_PAGE_WITH_TABLE,
    SAMPLE_PAGE_WITH_CODE,
    SAMPLE_PAGE_MALFORMED,
    SCENARIO_LIST_BODY,
    page_json,
    list_response,
)

__all__ = [
    'SERVER_URL',
    'USERNAME',
    'API_TOKEN',
    'SAMPLE_PAGE_HELLO',
    'SAMPLE_PAGE_SIMPLE',
    'SAMPLE_PAGE_WITH_TABLE',
    'SAMPLE_PAGE_WITH_CODE',
    'SAMPLE_PAGE_MALFORMED',
    'SCENARIO_LIST_BODY',
    'page_json',
    'list_response',
]
