"""Per-queue mutual exclusion for review_queue.

Queue documents are updated read-modify-write with no version token, so
every load-mutate-persist cycle on one queue must run under that queue's
lock. Different queues never share a lock.
"""

import asyncio

__all__ = [
    "QueueLockRegistry",
]


class QueueLockRegistry:
    """Hands out one ``asyncio.Lock`` per queue id.

    Example:
        locks = QueueLockRegistry()
        async with locks.lock_for("IW-Queues/IW-Queue.md"):
            ...
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def lock_for(self, queue_id: str) -> asyncio.Lock:
        """Get the lock guarding ``queue_id``, creating it on first use."""
        lock = self._locks.get(queue_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[queue_id] = lock
        return lock

    def __contains__(self, queue_id: str) -> bool:
        return queue_id in self._locks

    def __len__(self) -> int:
        return len(self._locks)
