"""Unit tests for pages.page_converter module."""

from unittest.mock import Mock

from confluence_pages.content_converter.markdown_converter import MarkdownConverter
from confluence_pages.pages.page_converter import convert_page
from tests.fixtures import SAMPLE_PAGE_HELLO, page_json


class TestConvertPage:
    """Test cases for convert_page."""

    def test_converts_title_body_and_version(self):
        source = page_json(version={'number': 3, 'message': 'edit', 'authorId': 'abc'})

        page = convert_page(source, "storage", MarkdownConverter())

        assert page.title == "Test Page"
        assert page.html_body == SAMPLE_PAGE_HELLO
        assert "Hello World" in page.markdown
        assert "This is a paragraph." in page.markdown
        assert page.version_info == {'number': 3, 'message': 'edit', 'authorId': 'abc'}
        assert page.raw_payload == source

    def test_missing_title_becomes_untitled(self):
        page = convert_page(page_json(title=None), "storage", MarkdownConverter())
        assert page.title == "Untitled"

    def test_null_title_becomes_untitled(self):
        source = page_json()
        source['title'] = None
        page = convert_page(source, "storage", MarkdownConverter())
        assert page.title == "Untitled"

    def test_missing_body_is_dropped(self):
        assert convert_page(page_json(html=None), "storage", MarkdownConverter()) is None

    def test_other_body_format_is_dropped(self):
        source = page_json(html=None, body={'atlas_doc_format': {'value': '{}'}})
        assert convert_page(source, "storage", MarkdownConverter()) is None

    def test_non_string_value_is_dropped(self):
        source = page_json(html=None, body={'storage': {'value': 42}})
        assert convert_page(source, "storage", MarkdownConverter()) is None

    def test_missing_version_is_none(self):
        page = convert_page(page_json(), "storage", MarkdownConverter())
        assert page.version_info is None

    def test_payloads_are_copies(self):
        source = page_json(version={'number': 1})

        page = convert_page(source, "storage", MarkdownConverter())
        source['version']['number'] = 99
        source['title'] = "Changed"

        assert page.version_info == {'number': 1}
        assert page.raw_payload['title'] == "Test Page"

    def test_raw_payload_keeps_key_order(self):
        source = page_json(spaceId="42", parentId="7")
        page = convert_page(source, "storage", MarkdownConverter())
        assert list(page.raw_payload) == list(source)

    def test_uses_given_converter(self):
        converter = Mock()
        converter.xhtml_to_markdown.return_value = "converted"

        page = convert_page(page_json(), "storage", converter)

        converter.xhtml_to_markdown.assert_called_once_with(SAMPLE_PAGE_HELLO)
        assert page.markdown == "converted"
