"""Confluence page data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

UNTITLED = "Untitled"


@dataclass(frozen=True)
class Page:
    """One Confluence page as returned by the list endpoint.

    Attributes:
        title: Page title ("Untitled" when the server sent none)
        markdown: Markdown converted from the storage body
        html_body: Raw storage format (XHTML) body
        version_info: Version object from the API, passed through untouched
        raw_payload: Complete page JSON as returned by the server
    """
    title: str
    markdown: str
    html_body: str
    version_info: Optional[Dict[str, Any]] = None
    raw_payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used for CLI output and storage sinks."""
        return {
            'title': self.title,
            'markdown': self.markdown,
            'versionInfo': self.version_info,
            'rawResponse': self.raw_payload,
        }
