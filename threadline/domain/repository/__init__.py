"""Repository interfaces for threadline domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from threadline.domain.repository.event import EventRepository

__all__ = [
    "EventRepository",
]
