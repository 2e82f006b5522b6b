"""Field validation for review_queue rows and schedulers.

Every function here is total: invalid input is replaced by a default
instead of raising, so that a hand-edited queue document always loads.
Defaults are fixed points, which makes each function idempotent.
"""

import math
from datetime import date, datetime, timedelta
from typing import Any

__all__ = [
    "DEFAULT_AFACTOR",
    "DEFAULT_INTERVAL",
    "DEFAULT_PRIORITY",
    "EPOCH",
    "MAX_INTERVAL",
    "MAX_PRIORITY",
    "MIN_PRIORITY",
    "add_days",
    "format_number",
    "to_number",
    "valid_afactor",
    "valid_date",
    "valid_interval",
    "valid_priority",
]

DEFAULT_PRIORITY = 30.0
MIN_PRIORITY = 0.0
MAX_PRIORITY = 100.0
DEFAULT_INTERVAL = 1
# Longest span representable between two dates
MAX_INTERVAL = (date.max - date.min).days
DEFAULT_AFACTOR = 2.0
EPOCH = date(1970, 1, 1)

_COMPACT_DATE_FORMATS = ("%Y%m%d", "%y%m%d")


def to_number(value: Any) -> float | None:
    """Coerce a cell value to a finite float.

    Args:
        value: Number or numeric string

    Returns:
        Finite float, or None if the value is not a number
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def valid_priority(value: Any) -> float:
    """Return the priority if it is a number in [0, 100], else 30."""
    number = to_number(value)
    if number is None or not MIN_PRIORITY <= number <= MAX_PRIORITY:
        return DEFAULT_PRIORITY
    return number


def valid_interval(value: Any) -> int:
    """Return the interval if it is a whole number >= 1, else 1.

    Intervals longer than ``MAX_INTERVAL`` days are capped.
    """
    number = to_number(value)
    if number is None or not number.is_integer() or number < 1:
        return DEFAULT_INTERVAL
    return min(int(number), MAX_INTERVAL)


def valid_afactor(value: Any) -> float:
    """Return the amplification factor if it is a number >= 1, else 2."""
    number = to_number(value)
    if number is None or number < 1:
        return DEFAULT_AFACTOR
    return number


def valid_date(value: Any) -> date:
    """Return the value as a calendar date, or the epoch if it is not one.

    Accepts ``date``/``datetime`` objects, ISO strings and compact
    ``YYYYMMDD`` / ``YYMMDD`` strings.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return EPOCH

    text = value.strip()
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in _COMPACT_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return EPOCH


def format_number(value: float) -> str:
    """Render a number the way queue tables store it (no trailing ``.0``)."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def add_days(start: date, days: int) -> date:
    """Return ``start`` moved ``days`` forward, saturating at ``date.max``."""
    if days >= (date.max - start).days:
        return date.max
    return start + timedelta(days=days)
