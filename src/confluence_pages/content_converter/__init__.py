"""Content conversion between Confluence storage XHTML and Markdown."""

from .markdown_converter import MarkdownConverter

__all__ = ['MarkdownConverter']
