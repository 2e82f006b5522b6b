"""Internal QueueDocument entity for review_queue.

This module contains the ordered collection of queue rows with the
due/priority ordering, pruning of dead links and table serialization.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from datetime import date

from review_queue.domain.markdown import parse_table_rows, render_table, split_document
from review_queue.errors import ParseError
from review_queue.logging import get_logger
from review_queue.models.row import AFactorRow, IterationRow, QueueRow, SimpleRow
from review_queue.utils.links import remove_brackets

__all__ = [
    "TABLE_ALIGN",
    "TABLE_HEADER",
    "QueueDocument",
    "RowType",
]

logger = get_logger(__name__)

# The header is the same for every row variant
TABLE_HEADER = ("Link", "Priority", "Notes", "Interval", "Next Rep")
TABLE_ALIGN = ("l", "r", "l", "r", "r")

PRIORITY_SPREAD = 99.9

RowType = type[SimpleRow] | type[AFactorRow] | type[IterationRow]


@dataclass
class QueueDocument:
    """Ordered rows of one queue.

    Rows keep insertion order until ``sort_reps`` is called. The document
    does not enforce link uniqueness; callers check ``has_row_with_link``
    before appending.

    Attributes:
        rows: Rows in their current order
        pruned_any: True once ``prune_deleted`` removed at least one row
    """

    rows: list[QueueRow] = field(default_factory=list)
    pruned_any: bool = False

    @classmethod
    def parse(cls, text: str, row_type: RowType) -> "QueueDocument":
        """Parse a queue document's table into rows of ``row_type``.

        Args:
            text: Raw document text, front matter included
            row_type: Row variant matching the document's scheduler

        Returns:
            QueueDocument in table order

        Raises:
            ParseError: If a table line does not have exactly 5 fields
        """
        _, body = split_document(text)
        rows: list[QueueRow] = []
        for line_number, cells in parse_table_rows(body):
            try:
                rows.append(row_type.from_fields(cells))
            except ParseError as e:
                raise ParseError(str(e), line_number=line_number) from e
        return cls(rows=rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[QueueRow]:
        return iter(self.rows)

    @property
    def has_reps(self) -> bool:
        """Check whether the queue has any rows."""
        return bool(self.rows)

    def prune_deleted(self, is_live: Callable[[str], bool]) -> int:
        """Remove rows whose link no longer resolves.

        Args:
            is_live: Returns True if a link still points at content

        Returns:
            Number of rows removed
        """
        kept = [row for row in self.rows if is_live(row.link)]
        removed = len(self.rows) - len(kept)
        self.rows = kept
        if removed > 0:
            self.pruned_any = True
            logger.info("pruned_deleted_links", removed=removed)
        return removed

    def sort_reps(self, today: date | None = None) -> None:
        """Order rows: due before not due, ascending priority within each.

        Two stable sorts, priority first, then due status.
        """
        today = today or date.today()
        self.rows.sort(key=lambda row: row.priority)
        self.rows.sort(key=lambda row: not row.is_due(today))

    def current_rep(self, today: date | None = None) -> QueueRow | None:
        """Return the row to review now, or None if the queue is empty."""
        self.sort_reps(today)
        return self.rows[0] if self.rows else None

    def next_rep(self, today: date | None = None) -> QueueRow | None:
        """Return the row after the current one, or None."""
        self.sort_reps(today)
        return self.rows[1] if len(self.rows) > 1 else None

    def remove_current_rep(self, today: date | None = None) -> QueueRow | None:
        """Remove and return the current row, or None if the queue is empty."""
        self.sort_reps(today)
        if not self.rows:
            return None
        return self.rows.pop(0)

    def append(self, row: QueueRow) -> None:
        """Append a row at the back without re-sorting."""
        self.rows.append(row)

    def has_row_with_link(self, link: str) -> bool:
        """Check whether a row points at ``link`` (brackets ignored)."""
        return self.find(link) is not None

    def find(self, link: str) -> QueueRow | None:
        """Return the row pointing at ``link``, or None."""
        link = remove_brackets(link)
        return next((row for row in self.rows if row.link == link), None)

    def replace_row(self, old: QueueRow, new: QueueRow) -> None:
        """Swap ``old`` for ``new`` at the same position.

        Raises:
            ValueError: If ``old`` is not in the document
        """
        for i, row in enumerate(self.rows):
            if row is old:
                self.rows[i] = new
                return
        raise ValueError(f"Row not in document: {old.link}")

    def spread_priorities(self) -> None:
        """Spread priorities evenly over (0, 100) in current row order.

        With n rows, row i gets ``round(99.9 / n * (i + 1), 2)``, so the
        last row always ends at 99.9.
        """
        if not self.rows:
            return
        step = PRIORITY_SPREAD / len(self.rows)
        self.rows = [
            row.replace(priority=round(step * (i + 1), 2)) for i, row in enumerate(self.rows)
        ]

    def serialize(self) -> str:
        """Render the rows as a markdown table (empty text if no rows)."""
        if not self.rows:
            return ""
        return render_table(TABLE_HEADER, [row.to_fields() for row in self.rows], TABLE_ALIGN)
