"""Markdown converter using markdownify and Pandoc.

Converts Confluence storage format (XHTML) to Markdown with markdownify,
and Markdown back to storage HTML with Pandoc.
"""

import re
import subprocess

from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..confluence_client.errors import ConversionError

PANDOC_TIMEOUT = 10


class _StorageMarkdownConverter(BaseMarkdownConverter):
    """markdownify converter tuned for Confluence storage format."""

    def __init__(self, **options):
        options.setdefault('heading_style', 'atx')
        options.setdefault('bullets', '-')
        options.setdefault('strong_em_symbol', '*')
        super().__init__(**options)

    @staticmethod
    def _in_table_cell(parent_tags) -> bool:
        return 'td' in parent_tags or 'th' in parent_tags

    def convert_p(self, el, text, parent_tags):
        """Paragraphs inside table cells become line breaks.

        Confluence stores multi-line cell content as several <p> tags, which
        would otherwise collapse into one line of the pipe table.
        """
        text = text.strip()
        if not text:
            return ''
        if self._in_table_cell(parent_tags):
            return text + '\n'
        if '_inline' in parent_tags:
            return ' ' + text + ' '
        return '\n\n%s\n\n' % text

    def _convert_cell(self, el, text):
        colspan = 1
        if 'colspan' in el.attrs and el['colspan'].isdigit():
            colspan = max(1, min(1000, int(el['colspan'])))
        cell_text = re.sub(r'(<br>)+', '<br>', text.strip().replace('\n', '<br>'))
        while cell_text.endswith('<br>'):
            cell_text = cell_text.removesuffix('<br>')
        return ' ' + cell_text + ' |' * colspan

    def convert_td(self, el, text, parent_tags):
        return self._convert_cell(el, text)

    def convert_th(self, el, text, parent_tags):
        return self._convert_cell(el, text)

    def convert_br(self, el, text, parent_tags):
        # markdown tables accept inline HTML
        if self._in_table_cell(parent_tags):
            return '<br>'
        return super().convert_br(el, text, parent_tags)


class MarkdownConverter:
    """Converts between Confluence storage XHTML and Markdown.

    Pandoc is only needed for Markdown -> XHTML and is looked up lazily, so
    listing pages works on machines without it.
    """

    def __init__(self):
        self._pandoc_checked = False

    def xhtml_to_markdown(self, xhtml: str) -> str:
        """Convert storage format XHTML to Markdown.

        Malformed markup is tolerated by the HTML parser.

        Args:
            xhtml: Confluence storage format string

        Returns:
            Markdown string (empty for empty input)
        """
        if not xhtml:
            return ""

        try:
            return _StorageMarkdownConverter().convert(xhtml)
        except Exception as e:
            raise ConversionError(f"Markdownify conversion failed: {e}") from e

    def markdown_to_xhtml(self, markdown: str) -> str:
        """Convert Markdown to storage format HTML using Pandoc.

        Raises:
            ConversionError: If Pandoc is missing, fails, or times out
        """
        if not markdown:
            return ""

        self._ensure_pandoc()

        try:
            result = subprocess.run(
                ["pandoc", "-f", "markdown", "-t", "html"],
                input=markdown,
                text=True,
                capture_output=True,
                check=True,
                timeout=PANDOC_TIMEOUT,
            )
        except subprocess.CalledProcessError as e:
            raise ConversionError(f"Pandoc conversion failed: {e.stderr}")
        except subprocess.TimeoutExpired:
            raise ConversionError(f"Pandoc conversion timed out (>{PANDOC_TIMEOUT}s)")

        return self._convert_br_to_p_in_cells(result.stdout)

    def _convert_br_to_p_in_cells(self, xhtml: str) -> str:
        """Split <br>-separated table cell content into <p> tags.

        Confluence renders multi-line cells from <p> tags, not <br>.
        """
        def convert_cell(match):
            tag, content = match.group(1), match.group(2)
            if not re.search(r'<br\s*/?>', content):
                return match.group(0)
            parts = [p.strip() for p in re.split(r'<br\s*/?>', content) if p.strip()]
            if len(parts) <= 1:
                return f'<{tag}>{"".join(parts)}</{tag}>'
            return f'<{tag}>' + ''.join(f'<p>{p}</p>' for p in parts) + f'</{tag}>'

        return re.sub(r'<(td|th)>(.*?)</\1>', convert_cell, xhtml, flags=re.DOTALL)

    def _ensure_pandoc(self) -> None:
        if self._pandoc_checked:
            return
        if not self._pandoc_installed():
            raise ConversionError(
                "Pandoc not found. Install: brew install pandoc (macOS) or "
                "apt-get install pandoc (Linux) or download from "
                "https://pandoc.org/installing.html"
            )
        self._pandoc_checked = True

    def _pandoc_installed(self) -> bool:
        try:
            result = subprocess.run(
                ["which", "pandoc"],
                capture_output=True,
                timeout=5,
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False
