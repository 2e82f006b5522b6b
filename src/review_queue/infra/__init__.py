"""Infrastructure adapters for review_queue."""
