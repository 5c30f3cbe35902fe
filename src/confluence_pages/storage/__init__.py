"""Storage of streamed page results."""

from .page_sink import PageSink
from .storage import LocalFileStorage, StorageService

__all__ = ['PageSink', 'LocalFileStorage', 'StorageService']
