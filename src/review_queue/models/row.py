"""Queue row models for review_queue.

A row is one reviewable item in a queue table: a link to some content,
a priority used as sort key, free-text notes and two variant-specific
scheduling columns. Rows are immutable values; ``replace`` returns a
re-validated copy.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import date
from typing import Annotated, Any, Literal, Self

from pydantic import BaseModel, Field, field_validator

from review_queue.errors import ParseError
from review_queue.utils.links import FIELD_DELIMITER, add_brackets, remove_brackets
from review_queue.utils.validation import (
    DEFAULT_INTERVAL,
    DEFAULT_PRIORITY,
    EPOCH,
    format_number,
    valid_date,
    valid_interval,
    valid_priority,
)

__all__ = [
    "FIELD_COUNT",
    "AFactorRow",
    "IterationRow",
    "QueueRow",
    "QueueRowBase",
    "RowCandidate",
    "SimpleRow",
]

FIELD_COUNT = 5
LINE_BREAKS = ("\r", "\n")


def _strip_text(value: Any) -> str:
    """Remove line breaks and field delimiters from a free-text cell."""
    text = "" if value is None else str(value)
    for char in (*LINE_BREAKS, FIELD_DELIMITER):
        text = text.replace(char, "")
    return text


class QueueRowBase(BaseModel, ABC, frozen=True):
    """Fields shared by every row variant.

    Attributes:
        link: Link target without ``[[ ]]`` markup
        priority: Sort key in [0, 100]; lower is reviewed first
        notes: Free text without line breaks or ``|``
    """

    link: str
    priority: float = Field(default=DEFAULT_PRIORITY)
    notes: str = ""

    @field_validator("link", mode="before")
    @classmethod
    def _normalize_link(cls, value: Any) -> str:
        return remove_brackets(_strip_text(value))

    @field_validator("priority", mode="before")
    @classmethod
    def _clamp_priority(cls, value: Any) -> float:
        return valid_priority(value)

    @field_validator("notes", mode="before")
    @classmethod
    def _clean_notes(cls, value: Any) -> str:
        return _strip_text(value).strip()

    @abstractmethod
    def is_due(self, today: date | None = None) -> bool:
        """Check whether the row is eligible for review on ``today``."""

    @abstractmethod
    def to_fields(self) -> tuple[str, str, str, str, str]:
        """Render the row as the five table cells."""

    def replace(self, **changes: Any) -> Self:
        """Return a copy with ``changes`` applied and validated."""
        return type(self).model_validate({**self.model_dump(), **changes})


class _ScheduledRow(QueueRowBase, frozen=True):
    """Row with an interval and a next repetition date."""

    interval: int = DEFAULT_INTERVAL
    next_rep_date: date = EPOCH

    @field_validator("interval", mode="before")
    @classmethod
    def _clamp_interval(cls, value: Any) -> int:
        return valid_interval(value)

    @field_validator("next_rep_date", mode="before")
    @classmethod
    def _clamp_date(cls, value: Any) -> date:
        return valid_date(value)

    def is_due(self, today: date | None = None) -> bool:
        return (today or date.today()) >= self.next_rep_date

    def to_fields(self) -> tuple[str, str, str, str, str]:
        return (
            add_brackets(self.link),
            format_number(self.priority),
            self.notes,
            format_number(self.interval),
            self.next_rep_date.isoformat(),
        )

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> Self:
        """Build a row from five table cells."""
        link, priority, notes, interval, next_rep = _unpack(fields)
        return cls(
            link=link,
            priority=priority,
            notes=notes,
            interval=interval,
            next_rep_date=next_rep,
        )


class SimpleRow(_ScheduledRow, frozen=True):
    """Row for the simple scheduler; due once ``next_rep_date`` is reached."""

    kind: Literal["simple"] = "simple"


class AFactorRow(_ScheduledRow, frozen=True):
    """Row for the amplification-factor scheduler.

    Each review pushes ``next_rep_date`` out by ``interval`` days and
    multiplies ``interval`` by the queue's afactor.
    """

    kind: Literal["afactor"] = "afactor"


class IterationRow(QueueRowBase, frozen=True):
    """Row for the iteration scheduler; always due.

    Attributes:
        iteration: Label of the iteration the row was last read in
        last_read_date: Date the row was last reviewed
    """

    kind: Literal["iteration"] = "iteration"
    iteration: str = ""
    last_read_date: date = EPOCH

    @field_validator("iteration", mode="before")
    @classmethod
    def _clean_iteration(cls, value: Any) -> str:
        return _strip_text(value).strip()

    @field_validator("last_read_date", mode="before")
    @classmethod
    def _clamp_date(cls, value: Any) -> date:
        return valid_date(value)

    def is_due(self, today: date | None = None) -> bool:
        return True

    def to_fields(self) -> tuple[str, str, str, str, str]:
        return (
            add_brackets(self.link),
            format_number(self.priority),
            self.notes,
            self.iteration,
            self.last_read_date.isoformat(),
        )

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> Self:
        """Build a row from five table cells."""
        link, priority, notes, iteration, last_read = _unpack(fields)
        return cls(
            link=link,
            priority=priority,
            notes=notes,
            iteration=iteration,
            last_read_date=last_read,
        )


QueueRow = Annotated[SimpleRow | AFactorRow | IterationRow, Field(discriminator="kind")]


def _unpack(fields: Sequence[str]) -> tuple[str, str, str, str, str]:
    if len(fields) != FIELD_COUNT:
        raise ParseError(f"expected {FIELD_COUNT} fields, got {len(fields)}")
    link, priority, notes, fourth, fifth = (field.strip() for field in fields)
    return link, priority, notes, fourth, fifth


class RowCandidate(BaseModel, frozen=True):
    """Unvalidated request to add a link to a queue.

    Candidates keep their raw text so that links or notes containing the
    field delimiter, or links containing line breaks, can be refused
    instead of silently rewritten.

    Attributes:
        link: Link, with or without ``[[ ]]`` markup
        priority: Requested priority; clamped when the row is built
        notes: Raw notes
        first_rep_date: First repetition date (default: due immediately)
    """

    link: str
    priority: float | str | None = None
    notes: str = ""
    first_rep_date: date | None = None

    @property
    def bare_link(self) -> str:
        """Link without ``[[ ]]`` markup."""
        return remove_brackets(self.link)

    def rejection_reason(self) -> str | None:
        """Return why this candidate cannot be stored, if it cannot."""
        if not self.bare_link:
            return "it has an empty link."
        if FIELD_DELIMITER in self.link or FIELD_DELIMITER in self.notes:
            return "it contains a pipe character."
        if any(char in self.bare_link for char in LINE_BREAKS):
            return "it contains a line break."
        return None
