"""Storage interface for review_queue.

This module defines the Protocol for reading and writing the raw text
of queue documents.
"""

from typing import ClassVar, Protocol, runtime_checkable

__all__ = [
    "DocumentStorageInterface",
]


@runtime_checkable
class DocumentStorageInterface(Protocol):
    """Contract for queue document storage.

    Queue ids are opaque to the core; the filesystem implementation
    treats them as paths relative to a vault root.
    """

    config_class: ClassVar[type | None] = None

    async def read(self, queue_id: str) -> str:
        """Read a queue document.

        Args:
            queue_id: Identity of the queue document

        Returns:
            Raw document text

        Raises:
            DocumentNotFoundError: If the document does not exist
            StorageIOError: If reading fails
        """
        ...

    async def write(self, queue_id: str, text: str) -> None:
        """Create or replace a queue document.

        Args:
            queue_id: Identity of the queue document
            text: Full document text

        Raises:
            StorageIOError: If writing fails
        """
        ...

    async def exists(self, queue_id: str) -> bool:
        """Check if a queue document exists.

        Args:
            queue_id: Identity of the queue document

        Returns:
            True if exists, False otherwise
        """
        ...
