"""Link resolution interface for review_queue.

This module defines the Protocol used to decide whether a row's link
still points at live content.
"""

from typing import ClassVar, Protocol, runtime_checkable

__all__ = [
    "LinkResolverInterface",
]


@runtime_checkable
class LinkResolverInterface(Protocol):
    """Contract for link liveness checks."""

    config_class: ClassVar[type | None] = None

    def is_live(self, link: str, source: str) -> bool:
        """Check whether a link resolves to existing content.

        Args:
            link: Bare link text (no ``[[ ]]``), may carry ``#`` anchors
            source: Queue id of the document containing the link,
                for resolving relative links

        Returns:
            True if the target exists
        """
        ...
