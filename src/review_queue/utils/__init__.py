"""Utility functions for review_queue.

This module contains internal validation and link helpers.
"""

from review_queue.utils.links import (
    FIELD_DELIMITER,
    add_brackets,
    link_target,
    remove_brackets,
)
from review_queue.utils.validation import (
    DEFAULT_AFACTOR,
    DEFAULT_INTERVAL,
    DEFAULT_PRIORITY,
    EPOCH,
    valid_afactor,
    valid_date,
    valid_interval,
    valid_priority,
)

__all__ = [
    "DEFAULT_AFACTOR",
    "DEFAULT_INTERVAL",
    "DEFAULT_PRIORITY",
    "EPOCH",
    "FIELD_DELIMITER",
    "add_brackets",
    "link_target",
    "remove_brackets",
    "valid_afactor",
    "valid_date",
    "valid_interval",
    "valid_priority",
]
