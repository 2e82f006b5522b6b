"""Configuration management for review_queue.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "LoggingSettings",
    "QueueSettings",
    "SchedulerName",
    "VaultSettings",
]

SchedulerName = Literal["simple", "afactor", "iteration"]


class VaultSettings(BaseSettings):
    """Filesystem settings for the vault holding notes and queue documents."""

    model_config = SettingsConfigDict(
        env_prefix="REVIEW_QUEUE_VAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root: Path = Path(".")
    encoding: str = "utf-8"


class QueueSettings(BaseSettings):
    """Queue behaviour settings.

    Example usage:
        settings = QueueSettings()
        controller = QueueController(settings.default_queue_id, ...)
    """

    model_config = SettingsConfigDict(
        env_prefix="REVIEW_QUEUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    queue_folder_path: str = "IW-Queues"
    queue_file_name: str = "IW-Queue.md"

    # Used when a document's front matter names no scheduler
    default_scheduler: SchedulerName = "afactor"

    # New rows get a random priority in this range
    default_priority_min: int = 10
    default_priority_max: int = 50
    default_first_rep_offset_days: int = Field(default=1, ge=0)

    ask_for_next_rep_date: bool = False

    @model_validator(mode="after")
    def _check_priority_range(self) -> "QueueSettings":
        if not 0 <= self.default_priority_min <= self.default_priority_max <= 100:
            raise ValueError("default priority range must satisfy 0 <= min <= max <= 100")
        return self

    @property
    def default_queue_id(self) -> str:
        """Identity of the default queue document."""
        if not self.queue_folder_path:
            return self.queue_file_name
        return f"{self.queue_folder_path.rstrip('/')}/{self.queue_file_name}"


class LoggingSettings(BaseSettings):
    """Log output settings, read once when review_queue is imported."""

    model_config = SettingsConfigDict(
        env_prefix="REVIEW_QUEUE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_output: bool = False
