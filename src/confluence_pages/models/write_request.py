"""Create and update request data models."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..confluence_client.errors import ConfigurationError


def _require(value: Optional[str], field_name: str) -> None:
    if value is None or not str(value).strip():
        raise ConfigurationError(f"{field_name} is required", field_name)


@dataclass(frozen=True)
class CreatePageRequest:
    """Resolved configuration for creating a page.

    Attributes:
        space_id: Target space ID
        title: Display title of the new page
        markdown: Markdown body, rendered to storage HTML before upload
        status: Optional 'current' or 'draft' (server default when omitted)
        parent_id: Optional parent page ID (space homepage when omitted)
        subtype: Optional 'live' for a collaborative live doc
        embedded: Store the page in the new content service
        make_private: Only the creator can view the page
        root_level: Create the page at the space root
    """
    server_url: Optional[str]
    username: Optional[str]
    api_token: Optional[str]
    space_id: Optional[str]
    title: Optional[str]
    markdown: Optional[str]
    status: Optional[str] = None
    parent_id: Optional[str] = None
    subtype: Optional[str] = None
    embedded: bool = False
    make_private: bool = False
    root_level: bool = False

    def validate(self) -> None:
        """Raise ConfigurationError if a required page field is missing."""
        _require(self.space_id, 'space_id')
        _require(self.title, 'title')
        if self.markdown is None:
            raise ConfigurationError("markdown is required", 'markdown')


@dataclass(frozen=True)
class UpdatePageRequest:
    """Resolved configuration for updating an existing page.

    version_info must hold both 'number' (the new version number) and
    'message' (the version comment).
    """
    server_url: Optional[str]
    username: Optional[str]
    api_token: Optional[str]
    page_id: Optional[str]
    status: Optional[str]
    title: Optional[str]
    markdown: Optional[str]
    version_info: Optional[Dict[str, Any]]
    space_id: Optional[str] = None
    parent_id: Optional[str] = None
    owner_id: Optional[str] = None

    def validate(self) -> None:
        """Raise ConfigurationError if a required page field is missing."""
        _require(self.page_id, 'page_id')
        _require(self.status, 'status')
        _require(self.title, 'title')
        if self.markdown is None:
            raise ConfigurationError("markdown is required", 'markdown')
        version_info = self.version_info or {}
        if version_info.get('number') is None or version_info.get('message') is None:
            raise ConfigurationError(
                "version_info.number and version_info.message are required",
                'version_info',
            )


@dataclass(frozen=True)
class PageWriteResult:
    """Raw JSON response returned by Confluence after a create or update."""
    status_code: int
    value: str
