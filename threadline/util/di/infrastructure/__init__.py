"""Infrastructure providers."""

from .persistence import PersistenceProvider

__all__ = ["PersistenceProvider"]
