"""Queue controller for review_queue.

This module orchestrates load, mutate and persist cycles on a single
queue document: dismissing and advancing repetitions, bulk adding rows,
editing row data and bootstrapping empty documents.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from review_queue.config import QueueSettings
from review_queue.domain.document import QueueDocument
from review_queue.domain.markdown import join_document, split_document
from review_queue.errors import QueueError, RowRejectedError
from review_queue.interfaces.links import LinkResolverInterface
from review_queue.interfaces.presenter import PresenterInterface
from review_queue.interfaces.storage import DocumentStorageInterface
from review_queue.logging import get_logger
from review_queue.models.row import AFactorRow, IterationRow, QueueRow, RowCandidate, SimpleRow
from review_queue.models.scheduler import (
    AFactorScheduler,
    IterationScheduler,
    SimpleScheduler,
    default_scheduler,
    scheduler_from_front_matter,
)
from review_queue.services.locks import QueueLockRegistry

__all__ = [
    "AddResult",
    "QueueController",
]

logger = get_logger(__name__)

NO_REPETITIONS = "No repetitions!"
NO_MORE_REPETITIONS = "No more repetitions!"
LOAD_FAILED = "Failed to load queue."
SAVE_FAILED = "Failed to save queue."

Scheduler = SimpleScheduler | AFactorScheduler | IterationScheduler


@dataclass
class AddResult:
    """Outcome of ``QueueController.add_rows``."""

    added: list[QueueRow] = field(default_factory=list)
    rejected: list[RowRejectedError] = field(default_factory=list)


class QueueController:
    """Runs scheduling commands against one queue document.

    Every mutating command holds the queue's lock for its whole
    load-mutate-persist cycle. A failed read or write aborts the command
    and leaves the stored document as it was.

    Example:
        controller = QueueController("IW-Queues/IW-Queue.md", storage, links, presenter)
        await controller.add_rows([RowCandidate(link="Reading/Paper")])
        await controller.advance_repetition()
    """

    def __init__(
        self,
        queue_id: str,
        storage: DocumentStorageInterface,
        link_resolver: LinkResolverInterface,
        presenter: PresenterInterface,
        settings: QueueSettings | None = None,
        locks: QueueLockRegistry | None = None,
    ) -> None:
        """Initialize controller with collaborators.

        Args:
            queue_id: Identity of the queue document in storage
            storage: Raw document storage
            link_resolver: Link liveness check used for pruning
            presenter: Host presentation (opening rows, messages)
            settings: Queue settings (default: loaded from environment)
            locks: Lock registry shared between controllers
        """
        self._queue_id = queue_id
        self._storage = storage
        self._links = link_resolver
        self._presenter = presenter
        self._settings = settings or QueueSettings()
        self._locks = locks or QueueLockRegistry()
        self._default_scheduler = default_scheduler(self._settings.default_scheduler)
        self._log = logger.bind(queue_id=queue_id)

    @property
    def queue_id(self) -> str:
        """Identity of the controlled queue document."""
        return self._queue_id

    # === LOAD / PERSIST ===

    async def ensure_document_exists(self) -> bool:
        """Write an empty queue document if none is stored yet.

        Returns:
            True if a document was created
        """
        if await self._storage.exists(self._queue_id):
            return False

        text = join_document(self._default_scheduler.to_front_matter(), QueueDocument().serialize())
        await self._storage.write(self._queue_id, text)
        self._log.info(
            "queue_document_created",
            scheduler=self._default_scheduler.scheduler,
        )
        return True

    async def load_document(self) -> QueueDocument:
        """Load, prune and sort the queue document.

        Returns:
            Ready-to-use QueueDocument

        Raises:
            DocumentNotFoundError: If the document does not exist
            ParseError: If the document is malformed
        """
        _, document = await self._load()
        return document

    async def load_scheduler(self) -> Scheduler:
        """Load the scheduler configuration of the queue document."""
        scheduler, _ = await self._load()
        return scheduler

    async def _load(self) -> tuple[Scheduler, QueueDocument]:
        try:
            text = await self._storage.read(self._queue_id)
            front_matter, _ = split_document(text)
            scheduler = scheduler_from_front_matter(front_matter, self._default_scheduler)
            document = QueueDocument.parse(text, scheduler.row_type)
        except QueueError as e:
            self._log.error("queue_load_failed", error=str(e))
            await self._presenter.report(LOAD_FAILED, user_visible=True)
            raise

        removed = document.prune_deleted(self._is_live)
        if removed:
            await self._presenter.report(f"Removed {removed} reps with non-existent links.")
        document.sort_reps()
        return scheduler, document

    def _is_live(self, link: str) -> bool:
        return self._links.is_live(link, self._queue_id)

    async def _persist(self, scheduler: Scheduler, document: QueueDocument) -> None:
        text = join_document(scheduler.to_front_matter(), document.serialize())
        try:
            await self._storage.write(self._queue_id, text)
        except QueueError as e:
            self._log.error("queue_save_failed", error=str(e))
            await self._presenter.report(SAVE_FAILED, user_visible=True)
            raise
        self._log.debug("queue_saved", rows=len(document))

    async def _persist_if_pruned(self, scheduler: Scheduler, document: QueueDocument) -> None:
        if document.pruned_any:
            await self._persist(scheduler, document)

    async def _open(self, row: QueueRow) -> None:
        await self._presenter.report(f"Loading repetition: {row.link}", user_visible=True)
        await self._presenter.show_row(row)

    # === COMMANDS ===

    async def current_repetition(self) -> QueueRow | None:
        """Open the current row if it is due.

        Returns:
            The opened row, or None if nothing is due
        """
        async with self._locks.lock_for(self._queue_id):
            scheduler, document = await self._load()
            current = document.current_rep()
            await self._persist_if_pruned(scheduler, document)

        if current is None or not current.is_due():
            await self._presenter.report(NO_MORE_REPETITIONS, user_visible=True)
            return None

        await self._open(current)
        return current

    async def dismiss_current(self) -> QueueRow | None:
        """Remove the current row from the queue if it is due.

        Returns:
            The dismissed row, or None if nothing was dismissed
        """
        async with self._locks.lock_for(self._queue_id):
            scheduler, document = await self._load()
            current = document.current_rep()

            if current is None:
                await self._presenter.report(NO_REPETITIONS, user_visible=True)
                await self._persist_if_pruned(scheduler, document)
                return None

            if not current.is_due():
                await self._presenter.report("No due repetition to dismiss.", user_visible=True)
                await self._persist_if_pruned(scheduler, document)
                return None

            document.remove_current_rep()
            await self._persist(scheduler, document)

        self._log.info("repetition_dismissed", link=current.link)
        await self._presenter.report(f"Dismissed repetition: {current.link}", user_visible=True)
        return current

    async def advance_repetition(self) -> bool:
        """Reschedule the current row and open the next due one.

        The current row is popped, rescheduled by the queue's scheduler and
        appended back. The rescheduled row is opened again if it is still
        due, otherwise the previous next row if that one is due.

        Returns:
            True if a row was rescheduled, False if nothing was due
        """
        async with self._locks.lock_for(self._queue_id):
            scheduler, document = await self._load()
            today = date.today()
            current = document.current_rep(today)
            upcoming = document.next_rep(today)

            if current is None or not current.is_due(today):
                await self._presenter.report(NO_REPETITIONS, user_visible=True)
                await self._persist_if_pruned(scheduler, document)
                return False

            document.remove_current_rep(today)
            scheduled = scheduler.schedule(document, current, today)

            to_open: QueueRow | None = None
            if scheduled.is_due(today):
                to_open = scheduled
            elif upcoming is not None and upcoming.is_due(today):
                to_open = document.find(upcoming.link) or upcoming

            await self._persist(scheduler, document)

        self._log.info(
            "repetition_advanced",
            link=scheduled.link,
            scheduler=scheduler.scheduler,
        )

        if to_open is not None:
            await self._open(to_open)
        else:
            await self._presenter.report(NO_REPETITIONS, user_visible=True)

        if self._settings.ask_for_next_rep_date:
            chosen = await self._presenter.prompt_for_date(scheduled)
            if chosen is not None:
                await self.set_next_rep_date(scheduled.link, chosen)

        return True

    async def add_rows(self, candidates: Iterable[RowCandidate]) -> AddResult:
        """Append new rows to the queue, skipping unusable candidates.

        Candidates whose link is already queued, or whose link or notes
        contain ``|``, are skipped and reported one by one. The document
        is written once after all candidates are processed.

        Args:
            candidates: Links to add

        Returns:
            AddResult listing added rows and rejections
        """
        result = AddResult()

        async with self._locks.lock_for(self._queue_id):
            await self.ensure_document_exists()
            scheduler, document = await self._load()

            for candidate in candidates:
                if document.has_row_with_link(candidate.bare_link):
                    reason: str | None = "it is already in your queue!"
                else:
                    reason = candidate.rejection_reason()

                if reason is not None:
                    rejection = RowRejectedError(candidate.bare_link, reason)
                    result.rejected.append(rejection)
                    self._log.info("row_rejected", link=candidate.link)
                    await self._presenter.report(str(rejection), user_visible=True)
                    continue

                row = scheduler.new_row(
                    candidate.bare_link,
                    priority=candidate.priority,
                    notes=candidate.notes,
                    first_rep_date=candidate.first_rep_date,
                )
                document.append(row)
                result.added.append(row)
                await self._presenter.report(f"Added note to queue: {row.link}", user_visible=True)

            await self._persist(scheduler, document)

        self._log.info(
            "rows_added",
            added=len(result.added),
            rejected=len(result.rejected),
        )
        return result

    async def edit_row(
        self,
        link: str,
        *,
        priority: float | None = None,
        notes: str | None = None,
        next_rep_date: date | None = None,
    ) -> QueueRow | None:
        """Edit a queued row's data.

        Values are validated like any row field, so an out-of-range
        priority falls back to the default. Iteration rows have no next
        repetition date; a date given for one is ignored.

        Args:
            link: Link of the row to edit
            priority: New priority
            notes: New notes
            next_rep_date: New next repetition date

        Returns:
            The updated row, or None if no row has that link
        """
        async with self._locks.lock_for(self._queue_id):
            scheduler, document = await self._load()
            row = document.find(link)
            if row is None:
                await self._presenter.report(f"{link} is not in the queue.", user_visible=True)
                await self._persist_if_pruned(scheduler, document)
                return None

            changes: dict[str, Any] = {}
            if priority is not None:
                changes["priority"] = priority
            if notes is not None:
                changes["notes"] = notes
            if next_rep_date is not None:
                match row:
                    case SimpleRow() | AFactorRow():
                        changes["next_rep_date"] = next_rep_date
                    case IterationRow():
                        await self._presenter.report(
                            f"{row.link} is an iteration row and has no next repetition date."
                        )

            updated = row.replace(**changes)
            document.replace_row(row, updated)
            await self._persist(scheduler, document)

        self._log.info("row_edited", link=updated.link, fields=sorted(changes))
        return updated

    async def set_next_rep_date(self, link: str, next_rep_date: date) -> QueueRow | None:
        """Override the next repetition date of a queued row."""
        return await self.edit_row(link, next_rep_date=next_rep_date)
