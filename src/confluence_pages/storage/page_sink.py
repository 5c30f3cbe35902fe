"""Temporary JSON-lines sink for streaming pages to storage.

Each page is written as one JSON object per line. Once a write fails the
sink closes itself and ignores every later page, so the stored file holds
the pages written before the failure.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import IO, Optional

from ..confluence_client.errors import SerializationError
from ..models.page import Page

logger = logging.getLogger(__name__)


class PageSink:
    """Scoped temporary file that pages are serialized into.

    Use as a context manager; the file handle is closed on every exit path.
    The file itself is kept until discard() so it can be handed to a
    storage service after closing.

    Example:
        >>> with PageSink() as sink:
        ...     sink.write(page)
        >>> uri = storage.put_file(sink.path)
        >>> sink.discard()
    """

    def __init__(self, directory: Optional[str] = None, suffix: str = ".jsonl"):
        fd, name = tempfile.mkstemp(suffix=suffix, dir=directory)
        self.path = Path(name)
        self._file: Optional[IO[str]] = os.fdopen(fd, 'w', encoding='utf-8')
        self.count = 0

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, page: Page) -> bool:
        """Serialize one page.

        Returns:
            True if the page was written, False if the sink is closed or the
            write failed (the failure is logged and the sink closed)
        """
        if self._file is None:
            logger.debug(f"Sink closed, skipping page '{page.title}'")
            return False

        try:
            self._write_line(page)
        except SerializationError as e:
            logger.error(f"Failed to write page to file: {e}")
            self.close()
            return False

        self.count += 1
        return True

    def _write_line(self, page: Page) -> None:
        try:
            line = json.dumps(page.to_dict(), ensure_ascii=False)
            self._file.write(line + '\n')
        except (TypeError, ValueError, OSError) as e:
            raise SerializationError(page.title, str(e)) from e

    def close(self) -> None:
        if self._file is not None:
            try:
                self._file.flush()
            finally:
                self._file.close()
                self._file = None

    def discard(self) -> None:
        """Close the sink and delete the temporary file."""
        self.close()
        self.path.unlink(missing_ok=True)

    def __enter__(self) -> 'PageSink':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
