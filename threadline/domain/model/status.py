"""Status resolution models."""

from typing import Optional

from threadline.domain.model.common import DomainModel
from threadline.domain.model.event import Event
from threadline.domain.value import PublicKey, StatusLabel


class AuthorizationContext(DomainModel):
    """Who may change the status of a tracked item.

    The item author may always set status. The repository owner and its
    maintainers join once the repository event has been resolved; until
    then ``complete`` is False and callers apply the pending context policy.
    """

    item_author: PublicKey
    owner: Optional[PublicKey] = None
    maintainers: frozenset[PublicKey] = frozenset()
    complete: bool = False

    @property
    def authors(self) -> frozenset[PublicKey]:
        """All pubkeys allowed to assert status."""
        allowed = {self.item_author, *self.maintainers}
        if self.owner:
            allowed.add(self.owner)
        return frozenset(allowed)

    def allows(self, pubkey: str) -> bool:
        return pubkey in self.authors


class StatusView(DomainModel):
    """Current status of an item as shown to users.

    ``status`` is None when no authorized status event exists, in which
    case the item is in the implicit open state.
    """

    status: Optional[Event] = None
    label: StatusLabel = StatusLabel.OPEN

    @property
    def is_default(self) -> bool:
        return self.status is None

    @property
    def kind(self) -> int | None:
        return self.status.kind if self.status else None
