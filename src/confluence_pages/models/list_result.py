"""Result types of a "list pages" invocation.

A result is either a PageList (pages returned inline) or StoredPages (pages
written to storage, only a reference returned). Which one is produced
depends solely on the request's fetch mode.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .page import Page


@dataclass(frozen=True)
class PageList:
    """Pages returned inline, in server order."""
    pages: Tuple[Page, ...]
    next_cursor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'children': [page.to_dict() for page in self.pages],
            'nextCursor': self.next_cursor,
        }


@dataclass(frozen=True)
class StoredPages:
    """Pages streamed to storage.

    Attributes:
        uri: Opaque location returned by the storage service
        count: Number of pages actually written
        next_cursor: Cursor for the following batch, if any
    """
    uri: str
    count: int = 0
    next_cursor: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'uri': self.uri,
            'count': self.count,
            'nextCursor': self.next_cursor,
        }


ListResult = Union[PageList, StoredPages]
