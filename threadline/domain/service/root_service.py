"""Thread root resolution service."""

import logfire

from threadline.config import ThreadingSettings
from threadline.domain import tags
from threadline.domain.model import Event
from threadline.domain.value import EventPointer, Pointer, ThreadingConvention

from .base import Service


class ThreadRootService(Service):
    """Domain service locating the conversation an event belongs to.

    Each kind follows one threading convention (see ThreadingConvention);
    the convention decides which tags name the root and the parent.
    """

    def __init__(self, settings: ThreadingSettings | None = None) -> None:
        """Initialize thread root service.

        Args:
            settings: Threading settings (defaults if omitted)
        """
        self.settings = settings or ThreadingSettings()

    def resolve_root(self, event: Event) -> Pointer:
        """Resolve the logical root of the conversation containing ``event``.

        - LINEAR_REPLY: the "root" marked tag, else the event itself
        - EXPLICIT_ROOT_TAGS: "E", then "A", then the parent tags, else the event itself
        - SELF_ROOTED: always the event itself

        Malformed tags are skipped. Never raises.

        Args:
            event: Any event

        Returns:
            Pointer to the thread root
        """
        convention = ThreadingConvention.for_kind(event.kind)
        with logfire.span(
            "root_service.resolve_root",
            event_id=event.id,
            kind=event.kind,
            convention=convention.value,
        ):
            root: Pointer | None = None
            if convention is ThreadingConvention.LINEAR_REPLY:
                root = tags.nip10_root(
                    event, positional=self.settings.positional_nip10_fallback
                )
            elif convention is ThreadingConvention.EXPLICIT_ROOT_TAGS:
                root = tags.comment_root(event) or tags.comment_parent(event)

            if root is None:
                return self.self_pointer(event)
            return root

    def declared_root(self, event: Event) -> Pointer | None:
        """Root an event declares for itself, without falling back.

        Self-rooted kinds declare nothing.
        """
        convention = ThreadingConvention.for_kind(event.kind)
        if convention is ThreadingConvention.LINEAR_REPLY:
            return tags.nip10_root(
                event, positional=self.settings.positional_nip10_fallback
            )
        if convention is ThreadingConvention.EXPLICIT_ROOT_TAGS:
            return tags.comment_root(event)
        return None

    def reply_pointer(self, event: Event) -> Pointer | None:
        """Immediate parent an event replies to."""
        convention = ThreadingConvention.for_kind(event.kind)
        if convention is ThreadingConvention.LINEAR_REPLY:
            return tags.nip10_reply(
                event, positional=self.settings.positional_nip10_fallback
            )
        if convention is ThreadingConvention.EXPLICIT_ROOT_TAGS:
            return tags.comment_parent(event)
        return None

    @staticmethod
    def self_pointer(event: Event) -> EventPointer:
        """Pointer to the event itself."""
        return EventPointer(id=event.id, author=event.pubkey, kind=event.kind)
