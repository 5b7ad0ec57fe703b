"""Test configuration and fixtures."""

from threadline.domain.model import Event
from threadline.domain.tags import encode_pointer_tag
from threadline.domain.value import AddressPointer, EventPointer, Pointer, kinds

ALICE = "a" * 64
BOB = "b" * 64
CAROL = "c" * 64
MALLORY = "f" * 64


def make_event(
    event_id: str,
    kind: int = kinds.TEXT_NOTE,
    created_at: int = 0,
    tags: list[list[str]] | None = None,
    pubkey: str = ALICE,
    content: str = "",
) -> Event:
    """Helper function to build events with readable ids for tests."""
    return Event(
        id=event_id,
        pubkey=pubkey,
        kind=kind,
        created_at=created_at,
        tags=[tuple(t) for t in tags or []],
        content=content or f"event {event_id}",
    )


def make_comment(
    event_id: str,
    root: Pointer,
    parent: Pointer | None = None,
    created_at: int = 0,
    pubkey: str = BOB,
    root_kind: int = kinds.TEXT_NOTE,
) -> Event:
    """Build a NIP-22 comment on ``root`` replying to ``parent``.

    ``parent`` defaults to the root (a top-level comment).
    """
    parent = parent or root
    parent_kind = root_kind if parent == root else kinds.COMMENT
    tags = [
        list(encode_pointer_tag(root, upper=True)),
        ["K", str(root_kind)],
        list(encode_pointer_tag(parent)),
        ["k", str(parent_kind)],
    ]
    return make_event(
        event_id, kind=kinds.COMMENT, created_at=created_at, tags=tags, pubkey=pubkey
    )


def make_note_reply(
    event_id: str,
    root_id: str,
    reply_id: str | None = None,
    created_at: int = 0,
    pubkey: str = BOB,
) -> Event:
    """Build a NIP-10 kind 1 reply with marked tags."""
    tags = [["e", root_id, "", "root"]]
    if reply_id is not None:
        tags.append(["e", reply_id, "", "reply"])
    return make_event(event_id, created_at=created_at, tags=tags, pubkey=pubkey)


def make_status(
    event_id: str,
    item_id: str,
    kind: int = kinds.STATUS_OPEN,
    created_at: int = 0,
    pubkey: str = ALICE,
) -> Event:
    """Build a NIP-34 status event for an item."""
    return make_event(
        event_id,
        kind=kind,
        created_at=created_at,
        tags=[["e", item_id, "", "root"]],
        pubkey=pubkey,
    )


def make_repository(
    identifier: str = "repo",
    owner: str = CAROL,
    maintainers: list[str] | None = None,
    created_at: int = 0,
) -> Event:
    """Build a kind 30617 repository announcement."""
    tags = [["d", identifier]]
    if maintainers:
        tags.append(["maintainers", *maintainers])
    return make_event(
        f"repo-{identifier}-{created_at}",
        kind=kinds.REPOSITORY,
        created_at=created_at,
        tags=tags,
        pubkey=owner,
    )


def repo_address(identifier: str = "repo", owner: str = CAROL) -> AddressPointer:
    return AddressPointer(kind=kinds.REPOSITORY, pubkey=owner, identifier=identifier)


def root_pointer(event_id: str) -> EventPointer:
    return EventPointer(id=event_id)
