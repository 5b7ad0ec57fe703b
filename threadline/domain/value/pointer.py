"""Pointers to other events.

A pointer either names one immutable event by id, or names the current
version of an addressable item by (kind, pubkey, identifier). Relay hints
tell a fetcher where to look; they never change which event is meant, so
they are excluded from equality and hashing.
"""

from typing import Union

from pydantic import Field

from threadline.domain.error import InvalidPointerError
from threadline.domain.value.common import ValueObject
from threadline.domain.value.identifiers import EventId, PublicKey, RelayUrl


class EventPointer(ValueObject):
    """Reference to one specific event."""

    id: EventId = Field(min_length=1)
    relays: tuple[RelayUrl, ...] = ()
    # Hints carried by some tag formats, informational only
    author: PublicKey | None = None
    kind: int | None = None

    @property
    def key(self) -> tuple[str, str]:
        return ("e", self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (EventPointer, AddressPointer)):
            return self.key == other.key
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.key)


class AddressPointer(ValueObject):
    """Reference to the latest version of an addressable item."""

    kind: int = Field(ge=0)
    pubkey: PublicKey = Field(min_length=1)
    identifier: str = ""
    relays: tuple[RelayUrl, ...] = ()

    @property
    def key(self) -> tuple[str, int, str, str]:
        return ("a", self.kind, self.pubkey, self.identifier)

    @property
    def coordinate(self) -> str:
        """Render as ``kind:pubkey:identifier``."""
        return f"{self.kind}:{self.pubkey}:{self.identifier}"

    @classmethod
    def from_coordinate(
        cls, coordinate: str, relays: tuple[str, ...] = ()
    ) -> "AddressPointer":
        """Parse a ``kind:pubkey:identifier`` coordinate.

        The identifier may itself contain colons; only the first two
        separators are significant.

        Raises:
            InvalidPointerError: If the kind, pubkey or identifier segment is missing
        """
        parts = coordinate.split(":", 2)
        if len(parts) != 3:
            raise InvalidPointerError(coordinate, "expected kind:pubkey:identifier")
        kind, pubkey, identifier = parts
        if not (kind.isascii() and kind.isdecimal()):
            raise InvalidPointerError(coordinate, "kind is not a number")
        if not pubkey:
            raise InvalidPointerError(coordinate, "pubkey is empty")
        return cls(
            kind=int(kind),
            pubkey=PublicKey(pubkey),
            identifier=identifier,
            relays=tuple(RelayUrl(r) for r in relays if r),
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (EventPointer, AddressPointer)):
            return self.key == other.key
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.key)


Pointer = Union[EventPointer, AddressPointer]
