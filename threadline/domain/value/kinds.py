"""Event kinds the engine knows about."""

TEXT_NOTE = 1
COMMENT = 1111
VOICE_REPLY = 1244

PATCH = 1617
PULL_REQUEST = 1618
PULL_REQUEST_UPDATE = 1619
ISSUE = 1621

STATUS_OPEN = 1630
STATUS_RESOLVED = 1631
STATUS_CLOSED = 1632
STATUS_DRAFT = 1633

REPOSITORY = 30617

STATUS_KINDS: frozenset[int] = frozenset(
    {STATUS_OPEN, STATUS_RESOLVED, STATUS_CLOSED, STATUS_DRAFT}
)

# Items that can carry a status
TRACKED_KINDS: frozenset[int] = frozenset(
    {PATCH, PULL_REQUEST, PULL_REQUEST_UPDATE, ISSUE}
)

# Items for which a resolved status reads as "merged"
MERGEABLE_KINDS: frozenset[int] = frozenset(
    {PATCH, PULL_REQUEST, PULL_REQUEST_UPDATE}
)


def is_addressable(kind: int) -> bool:
    """Whether events of this kind are addressed by kind:pubkey:identifier."""
    return 30000 <= kind < 40000
