"""Domain enums for threading and status."""

from enum import Enum

from threadline.domain.value import kinds


class ThreadingConvention(str, Enum):
    """How an event kind declares its place in a conversation.

    - LINEAR_REPLY: NIP-10 notes, root and parent marked on lowercase "e"/"a" tags
    - EXPLICIT_ROOT_TAGS: NIP-22 comments, root on uppercase "E"/"A", parent lowercase
    - SELF_ROOTED: commentable items that always start their own thread
    """

    LINEAR_REPLY = "linear_reply"
    EXPLICIT_ROOT_TAGS = "explicit_root_tags"
    SELF_ROOTED = "self_rooted"

    @classmethod
    def for_kind(cls, kind: int) -> "ThreadingConvention":
        """Look up the convention used by an event kind."""
        return _CONVENTIONS.get(kind, cls.SELF_ROOTED)


_CONVENTIONS: dict[int, ThreadingConvention] = {
    kinds.TEXT_NOTE: ThreadingConvention.LINEAR_REPLY,
    kinds.COMMENT: ThreadingConvention.EXPLICIT_ROOT_TAGS,
    kinds.VOICE_REPLY: ThreadingConvention.EXPLICIT_ROOT_TAGS,
}


class StatusLabel(str, Enum):
    """Semantic lifecycle state of a tracked item."""

    OPEN = "open"
    RESOLVED = "resolved"
    MERGED = "merged"
    CLOSED = "closed"
    DRAFT = "draft"

    @classmethod
    def for_kinds(cls, status_kind: int | None, item_kind: int) -> "StatusLabel":
        """Map a status event kind to a label for the given item kind.

        The resolved kind reads as "merged" on patches and pull requests and
        as "resolved" on issues. A missing status (None) is the implicit
        open state, as is any kind outside the status range.
        """
        if status_kind == kinds.STATUS_RESOLVED:
            if item_kind in kinds.MERGEABLE_KINDS:
                return cls.MERGED
            return cls.RESOLVED
        if status_kind == kinds.STATUS_CLOSED:
            return cls.CLOSED
        if status_kind == kinds.STATUS_DRAFT:
            return cls.DRAFT
        return cls.OPEN
