"""Presentation interface for review_queue.

This module defines the Protocol through which the controller talks to
the host application: opening rows, asking for dates and reporting
messages.
"""

from datetime import date
from typing import Protocol, runtime_checkable

from review_queue.models.row import QueueRow

__all__ = [
    "PresenterInterface",
]


@runtime_checkable
class PresenterInterface(Protocol):
    """Contract for host presentation."""

    async def show_row(self, row: QueueRow) -> None:
        """Open or display the content a row points at.

        Args:
            row: Row to display
        """
        ...

    async def prompt_for_date(self, row: QueueRow) -> date | None:
        """Ask the user for a manual next repetition date.

        Args:
            row: Row that was just rescheduled

        Returns:
            Chosen date, or None to keep the scheduled one
        """
        ...

    async def report(self, message: str, user_visible: bool = False) -> None:
        """Report a message about a queue operation.

        Args:
            message: Message text
            user_visible: True if the user should see it, not just logs
        """
        ...
