"""Filesystem adapters for review_queue."""

from review_queue.infra.filesystem.links import FileLinkResolver
from review_queue.infra.filesystem.storage import FileDocumentStorage

__all__ = [
    "FileDocumentStorage",
    "FileLinkResolver",
]
