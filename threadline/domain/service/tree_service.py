"""Comment tree construction service."""

from collections import defaultdict
from typing import Iterable

import logfire

from threadline.config import ThreadingSettings
from threadline.domain.model import CommentNode, Event
from threadline.domain.value import EventId, EventPointer, Pointer

from .base import Service
from .root_service import ThreadRootService

_IN_PROGRESS = "in_progress"
_DONE = "done"


class CommentTreeService(Service):
    """Domain service turning a flat set of replies into a comment forest.

    Candidates come from relays that do not trust each other, so any reply
    may point anywhere, including at itself or around in a loop. The tree
    is therefore built in a single pass over an id-indexed arena, with an
    explicit in-progress marker to cut reply cycles, and never by chasing
    pointers recursively.
    """

    def __init__(
        self,
        root_service: ThreadRootService,
        settings: ThreadingSettings | None = None,
    ) -> None:
        """Initialize comment tree service.

        Args:
            root_service: Root service decoding root and reply pointers
            settings: Threading settings (defaults if omitted)
        """
        self.root_service = root_service
        self.settings = settings or ThreadingSettings()

    def build_tree(
        self,
        root: Pointer,
        candidates: Iterable[Event],
        aliases: Iterable[Pointer] = (),
    ) -> tuple[CommentNode, ...]:
        """Build the comment forest hanging off ``root``.

        Algorithm:
        1. Keep candidates whose declared root is ``root`` or one of
           ``aliases`` (not the root itself)
        2. Index them by id
        3. Link each to its reply parent; unknown parents demote to top level
        4. Cut reply cycles with an in-progress marker per id
        5. Order siblings by (created_at, id) and assign depths top-down

        Args:
            root: Thread root pointer
            candidates: Current snapshot of candidate events, in any order
            aliases: Other pointers naming the same root, such as the event
                id of an addressable root threaded by its address

        Returns:
            Top-level nodes, oldest first. Every accepted candidate appears
            exactly once in the forest.
        """
        candidates = list(candidates)
        roots = frozenset({root, *aliases})
        with logfire.span(
            "tree_service.build_tree",
            root=str(root.key),
            candidate_count=len(candidates),
        ):
            arena = self._index(roots, candidates)
            ordered = sorted(arena.values(), key=lambda e: e.sort_key)

            parent_of = {
                event.id: self._parent_id(event, roots, arena) for event in ordered
            }
            self._break_cycles(ordered, parent_of)

            depth = self._depths(ordered, parent_of)
            max_depth = self.settings.max_depth
            if max_depth is not None:
                self._flatten(ordered, parent_of, depth, max_depth)

            forest = self._assemble(ordered, parent_of, depth)
            logfire.info(
                "Built comment tree",
                root=str(root.key),
                accepted=len(arena),
                rejected=len(candidates) - len(arena),
                top_level=len(forest),
            )
            return forest

    def belongs_to(
        self, event: Event, root: Pointer, aliases: Iterable[Pointer] = ()
    ) -> bool:
        """Whether ``event`` declares ``root`` (or an alias) as its thread root."""
        return self._declares(event, frozenset({root, *aliases}))

    def _declares(self, event: Event, roots: frozenset[Pointer]) -> bool:
        if any(isinstance(r, EventPointer) and event.id == r.id for r in roots):
            return False
        declared = self.root_service.declared_root(event)
        return declared is not None and declared in roots

    def _index(
        self, roots: frozenset[Pointer], candidates: list[Event]
    ) -> dict[EventId, Event]:
        arena: dict[EventId, Event] = {}
        for event in candidates:
            if not self._declares(event, roots):
                continue
            # Same id means same signed content; later copies are redundant
            arena.setdefault(event.id, event)
        return arena

    def _parent_id(
        self, event: Event, roots: frozenset[Pointer], arena: dict[EventId, Event]
    ) -> EventId | None:
        reply = self.root_service.reply_pointer(event)
        if reply is None or reply in roots:
            return None
        if (
            isinstance(reply, EventPointer)
            and reply.id in arena
            and reply.id != event.id
        ):
            return reply.id
        logfire.debug(
            "Reply parent unavailable, demoting to top level",
            event_id=event.id,
            parent=str(reply.key),
        )
        return None

    @staticmethod
    def _break_cycles(
        ordered: list[Event], parent_of: dict[EventId, EventId | None]
    ) -> None:
        # Walk each parent chain once. A chain that reaches a node still on
        # the current walk has closed a loop; the node closing it is demoted.
        state: dict[EventId, str] = {}
        for event in ordered:
            path: list[EventId] = []
            current: EventId | None = event.id
            while current is not None and current not in state:
                state[current] = _IN_PROGRESS
                path.append(current)
                parent = parent_of[current]
                if parent is not None and state.get(parent) == _IN_PROGRESS:
                    logfire.debug(
                        "Reply cycle broken", event_id=current, parent_id=parent
                    )
                    parent_of[current] = None
                    parent = None
                current = parent
            for node_id in path:
                state[node_id] = _DONE

    @staticmethod
    def _depths(
        ordered: list[Event], parent_of: dict[EventId, EventId | None]
    ) -> dict[EventId, int]:
        children: dict[EventId, list[EventId]] = defaultdict(list)
        frontier: list[EventId] = []
        for event in ordered:
            parent = parent_of[event.id]
            if parent is None:
                frontier.append(event.id)
            else:
                children[parent].append(event.id)

        depth: dict[EventId, int] = {}
        level = 0
        while frontier:
            next_frontier: list[EventId] = []
            for node_id in frontier:
                depth[node_id] = level
                next_frontier.extend(children[node_id])
            frontier = next_frontier
            level += 1
        return depth

    @staticmethod
    def _flatten(
        ordered: list[Event],
        parent_of: dict[EventId, EventId | None],
        depth: dict[EventId, int],
        max_depth: int,
    ) -> None:
        # Re-attach anything deeper than max_depth to its ancestor at max_depth - 1
        for event in ordered:
            if depth[event.id] <= max_depth:
                continue
            ancestor = parent_of[event.id]
            while ancestor is not None and depth[ancestor] >= max_depth:
                ancestor = parent_of[ancestor]
            parent_of[event.id] = ancestor
        for event in ordered:
            depth[event.id] = min(depth[event.id], max_depth)

    @staticmethod
    def _assemble(
        ordered: list[Event],
        parent_of: dict[EventId, EventId | None],
        depth: dict[EventId, int],
    ) -> tuple[CommentNode, ...]:
        children: dict[EventId, list[EventId]] = defaultdict(list)
        top_level: list[EventId] = []
        for event in ordered:
            parent = parent_of[event.id]
            if parent is None:
                top_level.append(event.id)
            else:
                children[parent].append(event.id)

        events = {event.id: event for event in ordered}
        nodes: dict[EventId, CommentNode] = {}
        # Deepest first so every child node exists before its parent
        for event_id in sorted(events, key=lambda i: -depth[i]):
            nodes[event_id] = CommentNode(
                event=events[event_id],
                children=tuple(nodes[c] for c in children[event_id]),
                depth=depth[event_id],
            )
        return tuple(nodes[i] for i in top_level)
