"""Scheduler configuration models for review_queue.

A queue's scheduler is named in the document's front matter and decides
how a row is rescheduled after review. Three strategies exist:

- simple: move the row to the back and spread priorities evenly
- afactor: push the next repetition out by the row's interval, then
  multiply the interval by the amplification factor
- iteration: stamp the row with the current iteration label and date,
  then spread priorities like simple
"""

import json
import math
from datetime import date
from typing import TYPE_CHECKING, Annotated, Any, ClassVar, Literal, get_args

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from review_queue.config import SchedulerName
from review_queue.errors import ParseError, RowKindMismatchError
from review_queue.logging import get_logger
from review_queue.models.row import AFactorRow, IterationRow, QueueRowBase, SimpleRow
from review_queue.utils.validation import (
    DEFAULT_AFACTOR,
    DEFAULT_INTERVAL,
    MAX_INTERVAL,
    add_days,
    format_number,
    valid_afactor,
    valid_interval,
)

if TYPE_CHECKING:
    from review_queue.domain.document import QueueDocument

__all__ = [
    "SCHEDULER_NAMES",
    "AFactorScheduler",
    "IterationScheduler",
    "SchedulerConfig",
    "SimpleScheduler",
    "default_scheduler",
    "scheduler_from_front_matter",
]

logger = get_logger(__name__)

SCHEDULER_NAMES: tuple[str, ...] = get_args(SchedulerName)
FRONT_MATTER_DELIMITER = "---"


class _SchedulerBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    scheduler: str

    def _front_matter(self, *lines: str) -> str:
        body = [f"scheduler: {json.dumps(self.scheduler, ensure_ascii=False)}", *lines]
        return "\n".join([FRONT_MATTER_DELIMITER, *body, FRONT_MATTER_DELIMITER])

    def _check_kind(self, row: QueueRowBase, row_type: type[QueueRowBase]) -> None:
        if not isinstance(row, row_type):
            kind = getattr(row, "kind", type(row).__name__)
            logger.error("schedule_row_kind_mismatch", scheduler=self.scheduler, row_kind=kind)
            raise RowKindMismatchError(self.scheduler, kind)


class SimpleScheduler(_SchedulerBase):
    """Reviewed rows go to the back of the queue."""

    row_type: ClassVar[type[SimpleRow]] = SimpleRow

    scheduler: Literal["simple"] = "simple"

    def new_row(
        self,
        link: str,
        priority: Any = None,
        notes: str = "",
        first_rep_date: date | None = None,
    ) -> SimpleRow:
        """Build a row of this queue's variant for a newly added link."""
        return SimpleRow(link=link, priority=priority, notes=notes, next_rep_date=first_rep_date)

    def schedule(
        self,
        document: "QueueDocument",
        row: QueueRowBase,
        today: date | None = None,
    ) -> SimpleRow:
        """Append ``row`` and re-spread priorities over the whole queue.

        The appended row ends up with the highest priority number. Its
        next repetition date is left unchanged.

        Returns:
            The rescheduled row as stored in the document
        """
        self._check_kind(row, SimpleRow)
        logger.debug("schedule_simple", link=row.link)
        document.append(row)
        document.spread_priorities()
        return document.rows[-1]

    def to_front_matter(self) -> str:
        """Render the front-matter block for this configuration."""
        return self._front_matter()


class AFactorScheduler(_SchedulerBase):
    """Intervals grow geometrically by ``afactor`` on every review.

    Attributes:
        afactor: Amplification factor (>= 1)
        interval: Interval given to newly added rows (>= 1)
    """

    row_type: ClassVar[type[AFactorRow]] = AFactorRow

    scheduler: Literal["afactor"] = "afactor"
    afactor: float = DEFAULT_AFACTOR
    interval: int = DEFAULT_INTERVAL

    @field_validator("afactor", mode="before")
    @classmethod
    def _clamp_afactor(cls, value: Any) -> float:
        return valid_afactor(value)

    @field_validator("interval", mode="before")
    @classmethod
    def _clamp_interval(cls, value: Any) -> int:
        return valid_interval(value)

    def new_row(
        self,
        link: str,
        priority: Any = None,
        notes: str = "",
        first_rep_date: date | None = None,
    ) -> AFactorRow:
        """Build a row of this queue's variant for a newly added link."""
        return AFactorRow(
            link=link,
            priority=priority,
            notes=notes,
            interval=self.interval,
            next_rep_date=first_rep_date,
        )

    def schedule(
        self,
        document: "QueueDocument",
        row: QueueRowBase,
        today: date | None = None,
    ) -> AFactorRow:
        """Push the row's next repetition out and grow its interval.

        ``next_rep_date = today + interval`` (capped at ``date.max``), then
        ``interval = ceil(afactor * interval)`` (capped at ``MAX_INTERVAL``).
        Other rows are untouched.

        Returns:
            The rescheduled row as stored in the document
        """
        self._check_kind(row, AFactorRow)
        today = today or date.today()
        # Whole days, rounded up; float noise below 1e-6 is dropped first
        grown = self.afactor * row.interval
        interval = MAX_INTERVAL if grown >= MAX_INTERVAL else math.ceil(round(grown, 6))
        scheduled = row.replace(
            next_rep_date=add_days(today, row.interval),
            interval=interval,
        )
        logger.debug(
            "schedule_afactor",
            link=row.link,
            next_rep_date=scheduled.next_rep_date,
            interval=scheduled.interval,
        )
        document.append(scheduled)
        return scheduled

    def to_front_matter(self) -> str:
        """Render the front-matter block for this configuration."""
        return self._front_matter(
            f"afactor: {format_number(self.afactor)}",
            f"interval: {self.interval}",
        )


class IterationScheduler(_SchedulerBase):
    """Rows are stamped with an iteration label each time they are read.

    Attributes:
        label: Current iteration label, stored under the ``iteration`` key
    """

    row_type: ClassVar[type[IterationRow]] = IterationRow

    scheduler: Literal["iteration"] = "iteration"
    label: str = Field(default="", validation_alias=AliasChoices("iteration", "label"))

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def new_row(
        self,
        link: str,
        priority: Any = None,
        notes: str = "",
        first_rep_date: date | None = None,
    ) -> IterationRow:
        """Build a row of this queue's variant for a newly added link.

        Iteration rows are always due, so ``first_rep_date`` is ignored.
        """
        return IterationRow(link=link, priority=priority, notes=notes)

    def schedule(
        self,
        document: "QueueDocument",
        row: QueueRowBase,
        today: date | None = None,
    ) -> IterationRow:
        """Stamp the row with the current iteration, append and re-spread.

        Returns:
            The rescheduled row as stored in the document
        """
        self._check_kind(row, IterationRow)
        scheduled = row.replace(iteration=self.label, last_read_date=today or date.today())
        logger.debug(
            "schedule_iteration",
            link=row.link,
            iteration=self.label,
            read_on=scheduled.last_read_date,
        )
        document.append(scheduled)
        document.spread_priorities()
        return document.rows[-1]

    def to_front_matter(self) -> str:
        """Render the front-matter block for this configuration."""
        return self._front_matter(f"iteration: {json.dumps(self.label, ensure_ascii=False)}")


SchedulerConfig = Annotated[
    SimpleScheduler | AFactorScheduler | IterationScheduler,
    Field(discriminator="scheduler"),
]

_scheduler_adapter: TypeAdapter[SimpleScheduler | AFactorScheduler | IterationScheduler] = (
    TypeAdapter(SchedulerConfig)
)


def default_scheduler(name: SchedulerName) -> SimpleScheduler | AFactorScheduler | IterationScheduler:
    """Build a scheduler with default parameters.

    Args:
        name: Scheduler name ("simple", "afactor" or "iteration")

    Returns:
        Scheduler configuration
    """
    return _scheduler_adapter.validate_python({"scheduler": name})


def scheduler_from_front_matter(
    front_matter: str | None,
    default: SimpleScheduler | AFactorScheduler | IterationScheduler,
) -> SimpleScheduler | AFactorScheduler | IterationScheduler:
    """Build the scheduler named by a document's front matter.

    Args:
        front_matter: YAML text between the delimiters, or None if absent
        default: Scheduler used when no known ``scheduler`` key is present

    Returns:
        Scheduler configuration

    Raises:
        ParseError: If the front matter is not valid YAML
    """
    if not front_matter or not front_matter.strip():
        return default

    try:
        meta = yaml.safe_load(front_matter)
    except yaml.YAMLError as e:
        raise ParseError(f"invalid front matter: {e}") from e

    if not isinstance(meta, dict):
        return default

    name = meta.get("scheduler")
    if name not in SCHEDULER_NAMES:
        if name is not None:
            logger.warning("unknown_scheduler", scheduler=name, fallback=default.scheduler)
        return default

    return _scheduler_adapter.validate_python(meta)
