"""review_queue - incremental review queues stored as markdown documents.

This package provides tools for:
- Parsing and writing queue documents (front matter + review table)
- Ordering rows by due status and priority
- Rescheduling reviewed rows with simple, afactor or iteration schedulers
- Running dismiss / advance / bulk-add commands safely against storage

Example usage:
    from review_queue import FileDocumentStorage, FileLinkResolver, ReviewQueues

    async with ReviewQueues(
        storage_class=FileDocumentStorage,
        link_resolver_class=FileLinkResolver,
        presenter=presenter,
    ) as rq:
        await rq.add_links(["Reading/Paper"])
        await rq.queue().advance_repetition()
"""

__version__ = "0.1.0"

from review_queue.config import QueueSettings, VaultSettings
from review_queue.domain.document import QueueDocument
from review_queue.errors import (
    DocumentNotFoundError,
    ParseError,
    QueueError,
    RowKindMismatchError,
    RowRejectedError,
    StorageIOError,
)
from review_queue.infra.filesystem import FileDocumentStorage, FileLinkResolver
from review_queue.interfaces import (
    DocumentStorageInterface,
    LinkResolverInterface,
    PresenterInterface,
)
from review_queue.models import (
    AFactorRow,
    AFactorScheduler,
    IterationRow,
    IterationScheduler,
    QueueRow,
    RowCandidate,
    SchedulerConfig,
    SimpleRow,
    SimpleScheduler,
)
from review_queue.orchestrator import ReviewQueues
from review_queue.services import AddResult, QueueController, QueueLockRegistry

__all__ = [  # noqa: RUF022
    # Orchestrator
    "ReviewQueues",
    "QueueController",
    "QueueLockRegistry",
    "AddResult",
    # Settings
    "QueueSettings",
    "VaultSettings",
    # Document model
    "QueueDocument",
    "QueueRow",
    "SimpleRow",
    "AFactorRow",
    "IterationRow",
    "RowCandidate",
    "SchedulerConfig",
    "SimpleScheduler",
    "AFactorScheduler",
    "IterationScheduler",
    # Implementations
    "FileDocumentStorage",
    "FileLinkResolver",
    # Interfaces
    "DocumentStorageInterface",
    "LinkResolverInterface",
    "PresenterInterface",
    # Errors
    "QueueError",
    "ParseError",
    "DocumentNotFoundError",
    "StorageIOError",
    "RowKindMismatchError",
    "RowRejectedError",
]
