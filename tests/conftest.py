"""Shared test fixtures for review_queue.

This module provides pytest fixtures used across all tests.
"""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from review_queue.config import QueueSettings
from review_queue.models.row import AFactorRow, IterationRow, SimpleRow
from review_queue.services.locks import QueueLockRegistry
from review_queue.services.queue_controller import QueueController
from tests.mocks.mock_storage import InMemoryDocumentStorage, StaticLinkResolver

QUEUE_ID = "IW-Queues/IW-Queue.md"
PAST = date(2020, 1, 1)
FUTURE = date(2999, 1, 1)

AFACTOR_DOCUMENT = """---
scheduler: "afactor"
afactor: 2
interval: 1
---

| Link | Priority | Notes | Interval | Next Rep |
| :--- | -------: | :--- | -------: | -------: |
| [[Reading/Paper]] | 40 | skim methods | 2 | 2020-01-01 |
| [[Reading/Book]] | 10 |  | 4 | 2999-01-01 |
| [[Reading/Blog]] | 20 | short | 1 | 2020-01-01 |
"""


# Mock fixtures
@pytest.fixture
def storage() -> InMemoryDocumentStorage:
    """Create empty in-memory storage."""
    return InMemoryDocumentStorage()


@pytest.fixture
def link_resolver() -> StaticLinkResolver:
    """Create a link resolver that treats every link as live."""
    return StaticLinkResolver()


@pytest.fixture
def mock_presenter() -> AsyncMock:
    """Create mock presenter interface."""
    presenter = AsyncMock()
    presenter.prompt_for_date.return_value = None
    return presenter


@pytest.fixture
def settings() -> QueueSettings:
    """Create settings with the afactor scheduler as default."""
    return QueueSettings(
        default_scheduler="afactor",
        default_priority_min=10,
        default_priority_max=50,
        ask_for_next_rep_date=False,
    )


@pytest.fixture
def controller(
    storage: InMemoryDocumentStorage,
    link_resolver: StaticLinkResolver,
    mock_presenter: AsyncMock,
    settings: QueueSettings,
) -> QueueController:
    """Create a controller for the default queue id."""
    return QueueController(
        QUEUE_ID,
        storage,
        link_resolver,
        mock_presenter,
        settings=settings,
        locks=QueueLockRegistry(),
    )


# Sample data fixtures
@pytest.fixture
def afactor_document_text() -> str:
    """Queue document with two due rows and one future row."""
    return AFACTOR_DOCUMENT


@pytest.fixture
def sample_simple_row() -> SimpleRow:
    """Create sample SimpleRow."""
    return SimpleRow(link="Notes/Simple", priority=25, notes="simple", next_rep_date=PAST)


@pytest.fixture
def sample_afactor_row() -> AFactorRow:
    """Create sample AFactorRow."""
    return AFactorRow(link="Notes/AFactor", priority=25, interval=3, next_rep_date=PAST)


@pytest.fixture
def sample_iteration_row() -> IterationRow:
    """Create sample IterationRow."""
    return IterationRow(link="Notes/Iteration", priority=25, iteration="Week 1")
