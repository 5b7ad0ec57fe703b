"""In-memory event repository."""

from typing import Iterable, Optional

from threadline.domain.model import Event
from threadline.domain.repository.event import EventRepository
from threadline.domain.value import AddressPointer, EventId


class InMemoryEventRepository(EventRepository):
    """In-memory implementation of EventRepository.

    Holds every event delivered so far, keyed by id.
    """

    def __init__(self) -> None:
        self._events: dict[EventId, Event] = {}

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by id."""
        return self._events.get(event_id)

    async def find_by_address(self, pointer: AddressPointer) -> Optional[Event]:
        """Find the latest version of an addressable event."""
        versions = [
            e
            for e in self._events.values()
            if e.kind == pointer.kind
            and e.pubkey == pointer.pubkey
            and (e.tag_value("d") or "") == pointer.identifier
        ]
        if not versions:
            return None
        # Newest wins; on equal timestamps the lowest id is kept
        return min(versions, key=lambda e: (-e.created_at, e.id))

    async def find_referencing(
        self,
        kinds: Iterable[int],
        tag_name: str,
        values: Iterable[str],
        limit: int | None = None,
    ) -> list[Event]:
        """Find events of the given kinds carrying a matching tag."""
        kind_set = set(kinds)
        value_set = set(values)
        events = [
            e
            for e in self._events.values()
            if e.kind in kind_set
            and any(len(t) > 1 and t[1] in value_set for t in e.iter_tags(tag_name))
        ]

        # Sort newest first, like a relay answering a REQ
        events.sort(key=lambda e: e.sort_key, reverse=True)

        if limit is not None:
            events = events[:limit]
        return events

    async def save(self, event: Event) -> Event:
        """Save an event."""
        self._events[event.id] = event
        return event
