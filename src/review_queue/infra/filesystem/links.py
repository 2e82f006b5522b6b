"""Filesystem link resolution for review_queue."""

from pathlib import Path, PurePosixPath
from typing import Any, Self

from review_queue.config import VaultSettings
from review_queue.interfaces.links import LinkResolverInterface
from review_queue.utils.links import link_target

__all__ = [
    "FileLinkResolver",
]

NOTE_SUFFIX = ".md"


class FileLinkResolver(LinkResolverInterface):
    """Resolves wiki links against files in a vault.

    A link is live when ``<target>.md`` or ``<target>`` exists, looked up
    first relative to the linking document's folder, then to the vault
    root. Heading and block anchors are ignored.
    """

    config_class = VaultSettings

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @classmethod
    async def from_config(cls, config: VaultSettings) -> Self:
        """Factory method for ReviewQueues instantiation."""
        return cls(config.root)

    @classmethod
    async def from_dict(cls, config: dict[str, Any]) -> Self:
        """Factory method for custom configuration dicts."""
        return cls(config["root"])

    def is_live(self, link: str, source: str) -> bool:
        target = link_target(link)
        if not target:
            return False

        source_dir = PurePosixPath(source).parent
        for base in (self._root / source_dir, self._root):
            candidate = base / target
            if candidate.is_file():
                return True
            if not target.endswith(NOTE_SUFFIX) and candidate.with_name(
                candidate.name + NOTE_SUFFIX
            ).is_file():
                return True
        return False
