"""Pointer tag codec.

Decoders are lenient: a tag that should carry a pointer but does not parse
is reported as absent (None) and never raises. Encoders produce the tags a
client attaches when publishing a reply.

Tag layouts handled here:

    ["e", <id>, <relay>, <marker>, <pubkey>]      NIP-10 event reference
    ["a", <kind:pubkey:identifier>, <relay>, <marker>]
    ["E", <id>, <relay>, <pubkey>]                NIP-22 root event
    ["A", <kind:pubkey:identifier>, <relay>]      NIP-22 root address
    ["e"/"a", ...]                                NIP-22 parent (same layout)
"""

from typing import Iterable

from threadline.domain.error import InvalidPointerError
from threadline.domain.model.event import Event, Tag
from threadline.domain.value import (
    AddressPointer,
    EventPointer,
    Pointer,
    PublicKey,
    RelayUrl,
    ThreadingConvention,
)
from threadline.domain.value import kinds

ROOT = "root"
REPLY = "reply"
MENTION = "mention"
MARKERS = frozenset({ROOT, REPLY, MENTION})


def _relays(tag: Tag) -> tuple[RelayUrl, ...]:
    if len(tag) > 2 and tag[2]:
        return (RelayUrl(tag[2]),)
    return ()


def marker(tag: Tag) -> str | None:
    """Return the NIP-10 marker of an "e"/"a" tag, if any."""
    if len(tag) > 3 and tag[3] in MARKERS:
        return tag[3]
    return None


def decode_event_tag(tag: Tag) -> EventPointer | None:
    """Decode an "e"/"E" tag into an EventPointer."""
    if len(tag) < 2 or not tag[1]:
        return None
    # Pubkey sits after the marker in NIP-10 tags, in its place in NIP-22 tags
    author = None
    if len(tag) > 3 and tag[3] and tag[3] not in MARKERS:
        author = tag[3]
    elif len(tag) > 4 and tag[4]:
        author = tag[4]
    return EventPointer(
        id=tag[1],
        relays=_relays(tag),
        author=PublicKey(author) if author else None,
    )


def decode_address_tag(tag: Tag) -> AddressPointer | None:
    """Decode an "a"/"A" tag into an AddressPointer."""
    if len(tag) < 2 or not tag[1]:
        return None
    try:
        return AddressPointer.from_coordinate(tag[1], relays=_relays(tag))
    except InvalidPointerError:
        return None


def _first_decoded(
    tags: Iterable[Tag], decode, wanted_marker: str | None = None
) -> Pointer | None:
    for tag in tags:
        if wanted_marker is not None and marker(tag) != wanted_marker:
            continue
        pointer = decode(tag)
        if pointer is not None:
            return pointer
    return None


def _is_unmarked(event: Event) -> bool:
    e_tags = list(event.iter_tags("e"))
    return bool(e_tags) and all(marker(tag) is None for tag in e_tags)


def nip10_root(event: Event, positional: bool = False) -> Pointer | None:
    """Root pointer of a NIP-10 note.

    Marked "root" tags are authoritative. With ``positional`` enabled, a
    note whose "e" tags carry no markers at all uses the first one.
    """
    pointer = _first_decoded(event.iter_tags("e"), decode_event_tag, ROOT)
    if pointer is None:
        pointer = _first_decoded(event.iter_tags("a"), decode_address_tag, ROOT)
    if pointer is None and positional and _is_unmarked(event):
        pointer = _first_decoded(event.iter_tags("e"), decode_event_tag)
    return pointer


def nip10_reply(event: Event, positional: bool = False) -> Pointer | None:
    """Immediate parent of a NIP-10 note.

    A direct reply to the root only carries the root marker, so the root
    doubles as the parent when no "reply" tag exists.
    """
    pointer = _first_decoded(event.iter_tags("e"), decode_event_tag, REPLY)
    if pointer is None:
        pointer = _first_decoded(event.iter_tags("a"), decode_address_tag, REPLY)
    if pointer is None and positional and _is_unmarked(event):
        pointer = _first_decoded(reversed(list(event.iter_tags("e"))), decode_event_tag)
    if pointer is None:
        pointer = nip10_root(event, positional=positional)
    return pointer


def comment_root(event: Event) -> Pointer | None:
    """Root scope of a NIP-22 comment (uppercase "E", then "A")."""
    pointer = _first_decoded(event.iter_tags("E"), decode_event_tag)
    if pointer is None:
        pointer = _first_decoded(event.iter_tags("A"), decode_address_tag)
    return pointer


def comment_parent(event: Event) -> Pointer | None:
    """Parent of a NIP-22 comment (lowercase "e", then "a")."""
    pointer = _first_decoded(event.iter_tags("e"), decode_event_tag)
    if pointer is None:
        pointer = _first_decoded(event.iter_tags("a"), decode_address_tag)
    return pointer


def encode_event_tag(
    pointer: EventPointer, name: str = "e", marker: str | None = None
) -> Tag:
    """Encode an EventPointer as an "e"/"E" tag."""
    relay = pointer.relays[0] if pointer.relays else ""
    if marker is not None:
        tag: Tag = (name, pointer.id, relay, marker)
        if pointer.author:
            tag += (pointer.author,)
        return tag
    if pointer.author:
        return (name, pointer.id, relay, pointer.author)
    return (name, pointer.id, relay) if relay else (name, pointer.id)


def encode_address_tag(
    pointer: AddressPointer, name: str = "a", marker: str | None = None
) -> Tag:
    """Encode an AddressPointer as an "a"/"A" tag."""
    relay = pointer.relays[0] if pointer.relays else ""
    if marker is not None:
        return (name, pointer.coordinate, relay, marker)
    return (name, pointer.coordinate, relay) if relay else (name, pointer.coordinate)


def encode_pointer_tag(pointer: Pointer, upper: bool = False, marker: str | None = None) -> Tag:
    """Encode any pointer with the matching tag letter."""
    if isinstance(pointer, AddressPointer):
        return encode_address_tag(pointer, "A" if upper else "a", marker)
    return encode_event_tag(pointer, "E" if upper else "e", marker)


def pointer_to(event: Event, relay: str | None = None) -> Pointer:
    """Pointer a reply should use to reference ``event``.

    Addressable events are referenced by address so replies follow edits.
    """
    relays = (RelayUrl(relay),) if relay else ()
    if kinds.is_addressable(event.kind):
        return AddressPointer(
            kind=event.kind,
            pubkey=event.pubkey,
            identifier=event.tag_value("d") or "",
            relays=relays,
        )
    return EventPointer(id=event.id, relays=relays, author=event.pubkey, kind=event.kind)


def _p_tags(*groups: Iterable[str]) -> list[Tag]:
    seen: dict[str, None] = {}
    for group in groups:
        for pubkey in group:
            if pubkey:
                seen.setdefault(pubkey, None)
    return [("p", pubkey) for pubkey in seen]


def build_reply_tags(
    reply_to: Event,
    reply_kind: int = kinds.TEXT_NOTE,
    mentions: Iterable[str] = (),
    relay: str | None = None,
) -> tuple[Tag, ...]:
    """Build the threading tags for a reply to ``reply_to``.

    Kind 1 replies use NIP-10 markers; every other reply kind uses NIP-22
    comment tags. ``relay`` is where ``reply_to`` was seen.
    """
    if reply_kind == kinds.TEXT_NOTE:
        return _build_nip10_tags(reply_to, mentions, relay)
    return _build_nip22_tags(reply_to, mentions, relay)


def _build_nip10_tags(
    reply_to: Event, mentions: Iterable[str], relay: str | None
) -> tuple[Tag, ...]:
    parent = EventPointer(
        id=reply_to.id,
        relays=(RelayUrl(relay),) if relay else (),
    )
    tags: list[Tag] = []
    root = nip10_root(reply_to) if reply_to.kind == kinds.TEXT_NOTE else None
    if root is None:
        tags.append(encode_event_tag(parent, marker=ROOT))
    else:
        tags.append(encode_pointer_tag(root, marker=ROOT))
        tags.append(encode_event_tag(parent, marker=REPLY))

    thread_authors = (t[1] for t in reply_to.iter_tags("p") if len(t) > 1)
    tags.extend(_p_tags([reply_to.pubkey], thread_authors, mentions))
    return tuple(tags)


def _build_nip22_tags(
    reply_to: Event, mentions: Iterable[str], relay: str | None
) -> tuple[Tag, ...]:
    parent = pointer_to(reply_to, relay)
    convention = ThreadingConvention.for_kind(reply_to.kind)

    tags: list[Tag] = []
    root_tags = [t for t in reply_to.tags if t and t[0] in ("E", "A", "I", "K", "P")]
    if convention is ThreadingConvention.EXPLICIT_ROOT_TAGS and comment_root(reply_to):
        # Replying inside a thread: the root scope is inherited unchanged
        tags.extend(root_tags)
    else:
        tags.append(("K", str(reply_to.kind)))
        tags.append(encode_pointer_tag(parent, upper=True))
        tags.append(("P", reply_to.pubkey))

    tags.append(encode_pointer_tag(parent))
    tags.append(("k", str(reply_to.kind)))
    tags.extend(_p_tags([reply_to.pubkey], mentions))
    return tuple(tags)


def references_event(event: Event, event_id: str) -> bool:
    """Whether ``event`` carries an "e" tag pointing at ``event_id``."""
    return any(len(tag) > 1 and tag[1] == event_id for tag in event.iter_tags("e"))


def status_root_id(status: Event) -> str | None:
    """Id of the item a status event applies to.

    The "root" marked "e" tag wins; otherwise the first "e" tag is used.
    """
    pointer = _first_decoded(status.iter_tags("e"), decode_event_tag, ROOT)
    if pointer is None:
        pointer = _first_decoded(status.iter_tags("e"), decode_event_tag)
    return pointer.id if pointer is not None else None


def status_root_relay_hint(status: Event) -> str | None:
    """Relay hint attached to the status event's item reference."""
    root_id = status_root_id(status)
    for tag in status.iter_tags("e"):
        if len(tag) > 2 and tag[1] == root_id and tag[2]:
            return tag[2]
    return None


def repository_address(event: Event) -> AddressPointer | None:
    """Address of the repository an issue, patch, PR or status belongs to."""
    for tag in event.iter_tags("a"):
        pointer = decode_address_tag(tag)
        if pointer is not None and pointer.kind == kinds.REPOSITORY:
            return pointer
    return None


def maintainers(repository: Event) -> list[str]:
    """Maintainer pubkeys declared by a repository event, owner excluded.

    A "maintainers" tag may list several pubkeys and may be repeated.
    """
    found: dict[str, None] = {}
    for tag in repository.iter_tags("maintainers"):
        for pubkey in tag[1:]:
            if pubkey and pubkey != repository.pubkey:
                found.setdefault(pubkey, None)
    return list(found)
