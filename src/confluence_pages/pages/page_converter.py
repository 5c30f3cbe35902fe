"""Mapping of page JSON from the v2 API into Page objects."""

import copy
from typing import Any, Dict, Optional

from ..content_converter.markdown_converter import MarkdownConverter
from ..models.page import UNTITLED, Page


def convert_page(
    page_json: Dict[str, Any],
    body_format: str,
    converter: MarkdownConverter,
) -> Optional[Page]:
    """Convert one element of the `results` array.

    Args:
        page_json: Page object as returned by the server
        body_format: Body representation requested (e.g. "storage")
        converter: Converter used for the HTML -> Markdown step

    Returns:
        Page, or None when the page carries no string body in body_format
    """
    title = page_json.get('title')
    if title is None:
        title = UNTITLED
    elif not isinstance(title, str):
        title = str(title)

    body = page_json.get('body')
    representation = body.get(body_format) if isinstance(body, dict) else None
    html = representation.get('value') if isinstance(representation, dict) else None
    if not isinstance(html, str):
        return None

    version = page_json.get('version')
    return Page(
        title=title,
        markdown=converter.xhtml_to_markdown(html),
        html_body=html,
        version_info=copy.deepcopy(version) if isinstance(version, dict) else None,
        raw_payload=copy.deepcopy(page_json),
    )
