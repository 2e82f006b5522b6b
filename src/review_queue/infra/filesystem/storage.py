"""Filesystem document storage for review_queue.

Queue ids are paths relative to the vault root. Blocking file IO runs
in a worker thread so the event loop is never stalled.
"""

import asyncio
from pathlib import Path
from typing import Any, Self

from review_queue.config import VaultSettings
from review_queue.errors import DocumentNotFoundError, StorageIOError
from review_queue.interfaces.storage import DocumentStorageInterface
from review_queue.logging import get_logger

__all__ = [
    "FileDocumentStorage",
]

logger = get_logger(__name__)


class FileDocumentStorage(DocumentStorageInterface):
    """Stores queue documents as text files under a vault root."""

    config_class = VaultSettings

    def __init__(self, root: Path | str, encoding: str = "utf-8") -> None:
        """Initialize storage.

        Args:
            root: Vault root directory
            encoding: Text encoding of queue documents
        """
        self._root = Path(root)
        self._encoding = encoding

    @classmethod
    async def from_config(cls, config: VaultSettings) -> Self:
        """Factory method for ReviewQueues instantiation."""
        return cls(config.root, encoding=config.encoding)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom configuration dicts."""
        return cls(config["root"], encoding=config.get("encoding", "utf-8"))

    @property
    def root(self) -> Path:
        """Vault root directory."""
        return self._root

    def path_for(self, queue_id: str) -> Path:
        """Resolve a queue id to a file path inside the vault.

        Raises:
            StorageIOError: If the id points outside the vault root
        """
        root = self._root.resolve()
        path = (root / queue_id).resolve()
        if not path.is_relative_to(root):
            raise StorageIOError(f"Queue path escapes vault root: {queue_id}")
        return path

    async def read(self, queue_id: str) -> str:
        path = self.path_for(queue_id)
        try:
            return await asyncio.to_thread(path.read_text, encoding=self._encoding)
        except FileNotFoundError as e:
            raise DocumentNotFoundError(queue_id) from e
        except (OSError, UnicodeError) as e:
            logger.error("queue_read_failed", queue_id=queue_id, error=str(e))
            raise StorageIOError(f"Failed to read {queue_id}: {e}") from e

    async def write(self, queue_id: str, text: str) -> None:
        path = self.path_for(queue_id)
        try:
            await asyncio.to_thread(self._write_text, path, text)
        except (OSError, UnicodeError) as e:
            logger.error("queue_write_failed", queue_id=queue_id, error=str(e))
            raise StorageIOError(f"Failed to write {queue_id}: {e}") from e

    async def exists(self, queue_id: str) -> bool:
        path = self.path_for(queue_id)
        return await asyncio.to_thread(path.is_file)

    def _write_text(self, path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(text, encoding=self._encoding)
        except (OSError, UnicodeError):
            tmp.unlink(missing_ok=True)
            raise
        tmp.replace(path)
