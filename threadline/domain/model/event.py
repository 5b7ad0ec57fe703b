"""Signed event entity.

Events arrive already verified by the transport layer. The engine only
reads them; nothing here checks signatures.
"""

from typing import Iterator, Optional

from pydantic import Field

from threadline.domain.model.common import DomainModel
from threadline.domain.value import EventId, PublicKey

Tag = tuple[str, ...]


class Event(DomainModel):
    """Event entity.

    Tags are ordered lists of strings where the first element names the tag.
    Both tag order and value order are significant and preserved.
    """

    id: EventId = Field(min_length=1)
    pubkey: PublicKey = Field(min_length=1)
    kind: int = Field(ge=0)
    created_at: int = Field(ge=0)  # Unix seconds
    tags: tuple[Tag, ...] = ()
    content: str = ""
    sig: Optional[str] = None

    def iter_tags(self, name: str) -> Iterator[Tag]:
        """Yield tags with the given name, in order."""
        return (tag for tag in self.tags if tag and tag[0] == name)

    def find_tag(self, name: str) -> Tag | None:
        """Return the first tag with the given name."""
        return next(self.iter_tags(name), None)

    def tag_value(self, name: str) -> str | None:
        """Return the first value of the first tag with the given name."""
        tag = self.find_tag(name)
        if tag is None or len(tag) < 2:
            return None
        return tag[1]

    @property
    def sort_key(self) -> tuple[int, str]:
        """Oldest first, id as tiebreaker."""
        return (self.created_at, self.id)
