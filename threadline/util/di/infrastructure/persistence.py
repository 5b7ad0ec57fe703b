"""Persistence infrastructure providers."""

from dishka import Scope, provide

from threadline.domain.repository import EventRepository
from threadline.persistence.repository.inmemory import InMemoryEventRepository
from threadline.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Event store provider.

    APP-scoped: the store accumulates deliveries across requests, the way a
    live subscription keeps growing while a view is open.
    """

    @provide(scope=Scope.APP)
    def get_event_repository(self) -> EventRepository:
        """Provide event repository."""
        return InMemoryEventRepository()
