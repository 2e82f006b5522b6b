"""ReviewQueues orchestrator for review_queue.

This module provides the main entry point for the review_queue package:
it instantiates the storage and link collaborators, hands out one
controller per queue document and tracks the active queue.
"""

import random
from collections.abc import Iterable
from datetime import date
from typing import Any

from review_queue.config import QueueSettings
from review_queue.interfaces.links import LinkResolverInterface
from review_queue.interfaces.presenter import PresenterInterface
from review_queue.interfaces.storage import DocumentStorageInterface
from review_queue.logging import get_logger
from review_queue.models.row import QueueRow, RowCandidate
from review_queue.services.locks import QueueLockRegistry
from review_queue.services.queue_controller import AddResult, QueueController
from review_queue.utils.validation import add_days

__all__ = ["ReviewQueues"]

logger = get_logger(__name__)


class ReviewQueues:
    """Main orchestrator for incremental review queues.

    Accepts implementation classes. Config is loaded from .env automatically.
    For custom implementations, set config_class = None and pass a custom config dict.

    Example:
        async with ReviewQueues(
            storage_class=FileDocumentStorage,
            link_resolver_class=FileLinkResolver,
            presenter=presenter,
        ) as rq:
            await rq.add_links(["Reading/Paper", "Reading/Book"])
            await rq.queue().advance_repetition()
    """

    def __init__(
        self,
        storage_class: type[DocumentStorageInterface],
        link_resolver_class: type[LinkResolverInterface],
        presenter: PresenterInterface,
        *,
        settings: QueueSettings | None = None,
        storage_custom_config: dict[str, Any] | None = None,
        link_resolver_custom_config: dict[str, Any] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize ReviewQueues with implementation classes.

        Args:
            storage_class: Document storage implementation class
            link_resolver_class: Link resolver implementation class
            presenter: Host presentation instance
            settings: Queue settings (default: loaded from .env)
            storage_custom_config: Custom config dict if storage_class.config_class is None
            link_resolver_custom_config: Custom config dict if
                link_resolver_class.config_class is None
            rng: Random source for default priorities
        """
        self._settings = settings or QueueSettings()
        self._storage_class = storage_class
        self._link_resolver_class = link_resolver_class
        self._presenter = presenter
        self._storage_custom_config = storage_custom_config
        self._link_resolver_custom_config = link_resolver_custom_config
        self._rng = rng or random.Random()

        self._storage: DocumentStorageInterface | None = None
        self._links: LinkResolverInterface | None = None
        self._locks = QueueLockRegistry()
        self._controllers: dict[str, QueueController] = {}
        self._active_queue_id = self._settings.default_queue_id

        self._connected = False

    async def _instantiate_class(
        self,
        cls: type,
        custom_config: dict[str, Any] | None,
    ) -> Any:
        """Instantiate an implementation class.

        If cls.config_class is set, instantiate config (loads from .env).
        If cls.config_class is None, use custom_config dict.
        """
        config_class = getattr(cls, "config_class", None)

        if config_class is None:
            if custom_config is None:
                raise ValueError(
                    f"{cls.__name__} has config_class=None but no custom_config provided"
                )
            return await cls.from_dict(custom_config)
        config = config_class()
        return await cls.from_config(config)

    async def _connect(self) -> None:
        """Instantiate collaborators."""
        if self._connected:
            return

        self._storage = await self._instantiate_class(
            self._storage_class, self._storage_custom_config
        )
        self._links = await self._instantiate_class(
            self._link_resolver_class, self._link_resolver_custom_config
        )

        self._connected = True
        logger.info("review_queues_connected", active_queue=self._active_queue_id)

    async def _disconnect(self) -> None:
        """Release collaborators."""
        if self._storage and hasattr(self._storage, "close"):
            await self._storage.close()
        self._controllers.clear()
        self._connected = False
        logger.info("review_queues_disconnected")

    async def __aenter__(self) -> "ReviewQueues":
        """Async context manager entry - connects automatically."""
        await self._connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - disconnects automatically."""
        await self._disconnect()

    def _ensure_connected(self) -> None:
        if not self._connected:
            raise RuntimeError(
                "ReviewQueues not connected. Use 'async with ReviewQueues(...) as rq:'"
            )

    # === QUEUES ===

    @property
    def settings(self) -> QueueSettings:
        """Queue settings in use."""
        return self._settings

    @property
    def active_queue_id(self) -> str:
        """Identity of the queue commands default to."""
        return self._active_queue_id

    def queue(self, queue_id: str | None = None) -> QueueController:
        """Get the controller for a queue (default: the active queue).

        Controllers are cached per queue id and share one lock registry,
        so concurrent commands on the same queue are serialized.
        """
        self._ensure_connected()
        assert self._storage is not None
        assert self._links is not None

        queue_id = queue_id or self._active_queue_id
        controller = self._controllers.get(queue_id)
        if controller is None:
            controller = QueueController(
                queue_id,
                self._storage,
                self._links,
                self._presenter,
                settings=self._settings,
                locks=self._locks,
            )
            self._controllers[queue_id] = controller
        return controller

    async def load_queue(self, queue_id: str) -> QueueRow | None:
        """Make ``queue_id`` the active queue.

        Creates the document if it does not exist yet.

        Returns:
            The new active queue's current row, or None if it is empty
        """
        self._ensure_connected()
        if not queue_id:
            await self._presenter.report("Failed to load queue.", user_visible=True)
            raise ValueError("queue_id must not be empty")

        controller = self.queue(queue_id)
        await controller.ensure_document_exists()
        document = await controller.load_document()

        self._active_queue_id = queue_id
        logger.info("queue_loaded", queue_id=queue_id, rows=len(document))
        await self._presenter.report(f"Loaded Queue: {queue_id}", user_visible=True)
        return document.current_rep()

    # === ADDING ===

    def candidate(
        self,
        link: str,
        notes: str = "",
        priority: float | None = None,
        today: date | None = None,
    ) -> RowCandidate:
        """Build a candidate with the configured default priority and date.

        Without an explicit priority a whole number is drawn uniformly from
        ``[default_priority_min, default_priority_max]``. The first
        repetition is ``default_first_rep_offset_days`` after today.
        """
        if priority is None:
            priority = self._rng.randint(
                self._settings.default_priority_min,
                self._settings.default_priority_max,
            )
        today = today or date.today()
        first_rep = add_days(today, self._settings.default_first_rep_offset_days)
        return RowCandidate(link=link, priority=priority, notes=notes, first_rep_date=first_rep)

    async def add_links(
        self,
        links: Iterable[str],
        queue_id: str | None = None,
        notes: str = "",
    ) -> AddResult:
        """Add links to a queue with default priorities and dates.

        Args:
            links: Links to add, with or without ``[[ ]]``
            queue_id: Target queue (default: the active queue)
            notes: Notes attached to every added row

        Returns:
            AddResult from the controller
        """
        self._ensure_connected()
        candidates = [self.candidate(link, notes=notes) for link in links]
        if not candidates:
            await self._presenter.report("No files to add.", user_visible=True)
            return AddResult()
        return await self.queue(queue_id).add_rows(candidates)
