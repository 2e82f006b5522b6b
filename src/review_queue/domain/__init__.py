"""Internal domain entities for review_queue."""

from review_queue.domain.document import QueueDocument

__all__ = [
    "QueueDocument",
]
