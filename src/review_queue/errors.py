"""Exception hierarchy for review_queue."""

__all__ = [
    "DocumentNotFoundError",
    "ParseError",
    "QueueError",
    "RowKindMismatchError",
    "RowRejectedError",
    "StorageIOError",
]


class QueueError(Exception):
    """Base class for all review_queue errors."""


class ParseError(QueueError):
    """A queue document could not be parsed.

    Attributes:
        line_number: 1-based line of the offending text, if known
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number


class DocumentNotFoundError(QueueError):
    """The queue document does not exist in storage."""

    def __init__(self, queue_id: str) -> None:
        super().__init__(f"Queue document not found: {queue_id}")
        self.queue_id = queue_id


class StorageIOError(QueueError):
    """Reading or writing a queue document failed."""


class RowKindMismatchError(QueueError):
    """A scheduler was asked to schedule a row of another variant."""

    def __init__(self, scheduler: str, row_kind: str) -> None:
        super().__init__(f"Scheduler '{scheduler}' cannot schedule a '{row_kind}' row")
        self.scheduler = scheduler
        self.row_kind = row_kind


class RowRejectedError(QueueError):
    """A candidate row was refused when adding to a queue.

    Never raised out of ``QueueController.add_rows``; instances are
    collected in ``AddResult.rejected``.
    """

    def __init__(self, link: str, reason: str) -> None:
        super().__init__(f"Skipping {link} because {reason}")
        self.link = link
        self.reason = reason
