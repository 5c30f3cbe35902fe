"""Data models for Confluence page requests and results."""

from .list_request import FetchMode, ListRequest
from .list_result import ListResult, PageList, StoredPages
from .page import Page
from .write_request import CreatePageRequest, PageWriteResult, UpdatePageRequest

__all__ = [
    'FetchMode',
    'ListRequest',
    'ListResult',
    'PageList',
    'StoredPages',
    'Page',
    'CreatePageRequest',
    'UpdatePageRequest',
    'PageWriteResult',
]
