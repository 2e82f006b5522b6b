"""Service layer for review_queue.

This module exports the queue controller and its lock registry.
"""

from review_queue.services.locks import QueueLockRegistry
from review_queue.services.queue_controller import AddResult, QueueController

__all__ = [
    "AddResult",
    "QueueController",
    "QueueLockRegistry",
]
