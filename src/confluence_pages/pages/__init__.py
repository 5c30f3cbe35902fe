"""Page operations: list, create and update."""

from .list_pages import PageListingClient, extract_next_cursor, validate_list_response
from .page_converter import convert_page
from .write_pages import PageCreator, PageUpdater, validate_write_response

__all__ = [
    'PageListingClient',
    'PageCreator',
    'PageUpdater',
    'convert_page',
    'extract_next_cursor',
    'validate_list_response',
    'validate_write_response',
]
