"""Structured logging for review_queue.

This module provides a configured structlog logger. Output goes to
stderr so hosts that print queue messages on stdout are not mixed with
log lines. Level and format come from ``LoggingSettings``
(``REVIEW_QUEUE_LOG_LEVEL``, ``REVIEW_QUEUE_LOG_JSON_OUTPUT``).
"""

import logging
import sys
from datetime import date
from typing import Any

import structlog

from review_queue.config import LoggingSettings

__all__ = [
    "configure_logging",
    "get_logger",
]


def _render_dates(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Render date values as ISO strings."""
    for key, value in event_dict.items():
        if isinstance(value, date):
            event_dict[key] = value.isoformat()
    return event_dict


def configure_logging(
    level: int | str = logging.INFO,
    json_output: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structlog for review_queue.

    Args:
        level: Logging level or level name (default: INFO)
        json_output: If True, output JSON; if False, plain console output
        add_timestamp: If True, add ISO timestamp to log entries
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        _render_dates,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("review_queue").setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Logger name (usually __name__ of the calling module)
    """
    return structlog.get_logger(name)


_configured = False


def _ensure_configured() -> None:
    global _configured
    if not _configured:
        settings = LoggingSettings()
        configure_logging(level=settings.level, json_output=settings.json_output)
        _configured = True


_ensure_configured()
