"""Domain value objects for threadline."""

from threadline.domain.value.identifiers import EventId, PublicKey, RelayUrl
from threadline.domain.value.pointer import AddressPointer, EventPointer, Pointer
from threadline.domain.value.types import StatusLabel, ThreadingConvention

__all__ = [
    # Identifiers
    "EventId",
    "PublicKey",
    "RelayUrl",
    # Pointers
    "AddressPointer",
    "EventPointer",
    "Pointer",
    # Types
    "StatusLabel",
    "ThreadingConvention",
]
