"""In-memory repository implementations."""

from .event import InMemoryEventRepository

__all__ = [
    "InMemoryEventRepository",
]
