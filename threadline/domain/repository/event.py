"""Event repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from threadline.domain.model import Event
from threadline.domain.value import AddressPointer, EventId


class EventRepository(ABC):
    """Repository for signed events.

    Stands in for the event subscription layer: it answers relay-style
    queries against whatever has been delivered so far. Every call returns
    a snapshot; later deliveries show up on the next call.
    """

    @abstractmethod
    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by id.

        Args:
            event_id: The event id

        Returns:
            The event if delivered, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_address(self, pointer: AddressPointer) -> Optional[Event]:
        """Find the latest version of an addressable event.

        Args:
            pointer: Address of the event

        Returns:
            The newest delivered version, None if none delivered
        """
        pass

    @abstractmethod
    async def find_referencing(
        self,
        kinds: Iterable[int],
        tag_name: str,
        values: Iterable[str],
        limit: int | None = None,
    ) -> List[Event]:
        """Find events of the given kinds carrying a matching tag.

        Mirrors a relay filter such as ``{"kinds": [1111], "#E": [id]}``.

        Args:
            kinds: Event kinds to match
            tag_name: Single-letter tag name (case sensitive)
            values: Accepted first values of the tag
            limit: Maximum number of events, newest first

        Returns:
            Matching events, newest first
        """
        pass

    @abstractmethod
    async def save(self, event: Event) -> Event:
        """Store a delivered event.

        Args:
            event: The event to store

        Returns:
            The stored event
        """
        pass
