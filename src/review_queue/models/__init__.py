"""Public models for review_queue.

This module exports queue rows, add candidates and scheduler configurations.
"""

from review_queue.models.row import (
    AFactorRow,
    IterationRow,
    QueueRow,
    QueueRowBase,
    RowCandidate,
    SimpleRow,
)
from review_queue.models.scheduler import (
    AFactorScheduler,
    IterationScheduler,
    SchedulerConfig,
    SimpleScheduler,
    default_scheduler,
    scheduler_from_front_matter,
)

__all__ = [
    "AFactorRow",
    "AFactorScheduler",
    "IterationRow",
    "IterationScheduler",
    "QueueRow",
    "QueueRowBase",
    "RowCandidate",
    "SchedulerConfig",
    "SimpleRow",
    "SimpleScheduler",
    "default_scheduler",
    "scheduler_from_front_matter",
]
