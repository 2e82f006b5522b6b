"""Interface contracts for review_queue.

This module exports all Protocol-based interfaces for dependency injection.
"""

from review_queue.interfaces.links import LinkResolverInterface
from review_queue.interfaces.presenter import PresenterInterface
from review_queue.interfaces.storage import DocumentStorageInterface

__all__ = [
    "DocumentStorageInterface",
    "LinkResolverInterface",
    "PresenterInterface",
]
