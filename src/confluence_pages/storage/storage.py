"""Storage services that take ownership of finished sink files."""

import logging
import shutil
import uuid
from pathlib import Path
from typing import Protocol, Union

from ..confluence_client.errors import ConfigurationError

logger = logging.getLogger(__name__)


class StorageService(Protocol):
    """Accepts a finished local file and returns an opaque location."""

    def put_file(self, path: Path) -> str:
        ...


class LocalFileStorage:
    """Stores files under a local directory and returns file:// URIs.

    Every stored file gets a unique name so repeated runs never overwrite
    each other.
    """

    def __init__(self, root_dir: Union[str, Path]):
        self.root_dir = Path(root_dir)

    def put_file(self, path: Path) -> str:
        path = Path(path)
        try:
            self.root_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"cannot create storage directory {self.root_dir}: {e}", 'storage_dir'
            ) from e

        target = self.root_dir / f"{uuid.uuid4().hex}{path.suffix}"
        shutil.copyfile(path, target)
        logger.info(f"Stored {path.name} as {target}")
        return target.resolve().as_uri()
