"""Strongly typed identifiers for protocol entities.

Event ids and public keys are both hex strings on the wire; NewType keeps
them from being mixed up in signatures.
"""

from typing import NewType

EventId = NewType("EventId", str)
PublicKey = NewType("PublicKey", str)
RelayUrl = NewType("RelayUrl", str)
