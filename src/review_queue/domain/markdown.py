"""Markdown codec for queue documents.

A queue document is a front-matter block delimited by ``---`` lines,
followed by a pipe table::

    ---
    scheduler: "afactor"
    ---

    | Link      | Priority | Notes | Interval |   Next Rep |
    | :-------- | -------: | :---- | -------: | ---------: |
    | [[Paper]] |       30 |       |        1 | 1970-01-01 |
"""

from collections.abc import Sequence
from typing import Literal

from review_queue.models.scheduler import FRONT_MATTER_DELIMITER
from review_queue.utils.links import FIELD_DELIMITER

__all__ = [
    "Alignment",
    "join_document",
    "parse_table_rows",
    "render_table",
    "split_document",
    "split_row",
]

Alignment = Literal["l", "r"]

# Header and alignment rows precede the table body
TABLE_PREAMBLE_LINES = 2


def split_document(text: str) -> tuple[str | None, list[tuple[int, str]]]:
    """Split a queue document into front matter and body lines.

    The front matter is everything between the first and second line that
    is exactly ``---``. Without a second delimiter the whole text is body.

    Args:
        text: Raw document text

    Returns:
        (front matter text or None, [(1-based line number, line), ...])
    """
    lines = text.splitlines()
    delimiters = [i for i, line in enumerate(lines) if line.strip() == FRONT_MATTER_DELIMITER]

    if len(delimiters) < 2:
        return None, [(i + 1, line) for i, line in enumerate(lines)]

    start, end = delimiters[0], delimiters[1]
    front_matter = "\n".join(lines[start + 1 : end])
    body = [(i + 1, lines[i]) for i in range(end + 1, len(lines))]
    return front_matter, body


def split_row(line: str) -> list[str]:
    """Split one table line into trimmed cells.

    One leading and one trailing ``|`` are removed before splitting.
    """
    text = line.strip()
    if text.startswith(FIELD_DELIMITER):
        text = text[1:]
    if text.endswith(FIELD_DELIMITER):
        text = text[:-1]
    return [cell.strip() for cell in text.split(FIELD_DELIMITER)]


def parse_table_rows(body: Sequence[tuple[int, str]]) -> list[tuple[int, list[str]]]:
    """Return the cells of every data row in a table body.

    Blank lines before the table are skipped, then the header and
    alignment rows. Every further non-empty line is a data row.

    Args:
        body: Numbered body lines from ``split_document``

    Returns:
        List of (line number, cells)
    """
    remaining = list(body)
    while remaining and not remaining[0][1].strip():
        remaining.pop(0)
    remaining = remaining[TABLE_PREAMBLE_LINES:]
    return [(number, split_row(line)) for number, line in remaining if line.strip()]


def render_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    align: Sequence[Alignment],
) -> str:
    """Render a padded markdown pipe table.

    Args:
        header: Column titles
        rows: Cell text per row, one entry per column
        align: "l" or "r" per column

    Returns:
        Table text without a trailing newline
    """
    widths = [max(3, len(title)) for title in header]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def _line(cells: Sequence[str]) -> str:
        padded = [
            cell.ljust(width) if side == "l" else cell.rjust(width)
            for cell, width, side in zip(cells, widths, align, strict=True)
        ]
        return "| " + " | ".join(padded) + " |"

    rule = [
        ":" + "-" * (width - 1) if side == "l" else "-" * (width - 1) + ":"
        for width, side in zip(widths, align, strict=True)
    ]
    lines = [_line(header), "| " + " | ".join(rule) + " |"]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines)


def join_document(front_matter: str, table: str) -> str:
    """Join a rendered front-matter block and table into document text."""
    return front_matter + "\n\n" + table
