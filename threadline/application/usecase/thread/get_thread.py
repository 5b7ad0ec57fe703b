"""Get thread use case."""

import logfire
from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase
from threadline.domain import tags
from threadline.domain.error import NotFoundError
from threadline.domain.model import CommentNode, Event, count_nodes
from threadline.domain.repository import EventRepository
from threadline.domain.service import CommentTreeService, ThreadRootService
from threadline.domain.value import AddressPointer, EventId, EventPointer, Pointer, kinds


class CommentNodeResponse(BaseModel):
    """Comment node in response.

    Recursive structure mirroring the domain tree.
    """

    event_id: str
    pubkey: str
    kind: int
    content: str
    created_at: int
    depth: int
    children: list["CommentNodeResponse"]

    @classmethod
    def from_domain(cls, node: CommentNode) -> "CommentNodeResponse":
        """Convert a domain CommentNode to a response model.

        Args:
            node: Domain comment node

        Returns:
            Response model with children recursively converted
        """
        return cls(
            event_id=node.event.id,
            pubkey=node.event.pubkey,
            kind=node.event.kind,
            content=node.event.content,
            created_at=node.event.created_at,
            depth=node.depth,
            children=[cls.from_domain(child) for child in node.children],
        )


class GetThreadRequest(BaseModel):
    """Get thread request."""

    event_id: str  # Any event in the thread, root or reply


class GetThreadResponse(BaseModel):
    """Get thread response."""

    root: str  # Event id, or kind:pubkey:identifier for addressable roots
    root_event_id: str | None  # None while the root itself has not arrived
    comments: list[CommentNodeResponse]
    total: int


class GetThreadUseCase(BaseUseCase[GetThreadRequest, GetThreadResponse]):
    """Use case for reconstructing the thread an event belongs to.

    Safe to re-run on every delivery: the tree is rebuilt from the current
    snapshot each time.
    """

    def __init__(
        self,
        event_repository: EventRepository,
        root_service: ThreadRootService,
        tree_service: CommentTreeService,
    ) -> None:
        """Initialize get thread use case.

        Args:
            event_repository: Snapshot of delivered events
            root_service: Root resolution service
            tree_service: Comment tree service
        """
        self.event_repository = event_repository
        self.root_service = root_service
        self.tree_service = tree_service

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Load the requested event
        2. Resolve its thread root and load the root event if delivered
        3. Collect replies referencing the root
        4. Build the comment tree

        Args:
            request: Get thread request

        Returns:
            Thread tree with root reference and total comment count

        Raises:
            NotFoundError: If the requested event has not been delivered
        """
        event = await self.event_repository.find_by_id(EventId(request.event_id))
        if event is None:
            raise NotFoundError("Event", request.event_id)

        root = self.root_service.resolve_root(event)
        root_event = await self._load(root)
        thread = self._thread_pointer(root, root_event)
        aliases = self._aliases(thread, root_event)

        candidates = await self._replies([thread, *aliases])
        forest = self.tree_service.build_tree(thread, candidates, aliases)

        logfire.info(
            "Thread assembled",
            event_id=event.id,
            root=str(thread.key),
            root_loaded=root_event is not None,
            comment_count=count_nodes(forest),
        )
        return GetThreadResponse(
            root=thread.coordinate if isinstance(thread, AddressPointer) else thread.id,
            root_event_id=root_event.id if root_event else None,
            comments=[CommentNodeResponse.from_domain(node) for node in forest],
            total=count_nodes(forest),
        )

    async def _load(self, root: Pointer) -> Event | None:
        if isinstance(root, AddressPointer):
            return await self.event_repository.find_by_address(root)
        return await self.event_repository.find_by_id(root.id)

    @staticmethod
    def _thread_pointer(root: Pointer, root_event: Event | None) -> Pointer:
        # Comments on addressable items reference the address, not a version
        if (
            isinstance(root, EventPointer)
            and root_event is not None
            and kinds.is_addressable(root_event.kind)
        ):
            return tags.pointer_to(root_event)
        return root

    @staticmethod
    def _aliases(thread: Pointer, root_event: Event | None) -> list[Pointer]:
        # Replies may name the loaded version of an addressable root by id
        if isinstance(thread, AddressPointer) and root_event is not None:
            return [EventPointer(id=root_event.id)]
        return []

    async def _replies(self, roots: list[Pointer]) -> list[Event]:
        replies: list[Event] = []
        for root in roots:
            if isinstance(root, AddressPointer):
                upper, lower, value = "A", "a", root.coordinate
            else:
                upper, lower, value = "E", "e", root.id

            replies += await self.event_repository.find_referencing(
                kinds=[kinds.COMMENT, kinds.VOICE_REPLY], tag_name=upper, values=[value]
            )
            replies += await self.event_repository.find_referencing(
                kinds=[kinds.TEXT_NOTE], tag_name=lower, values=[value]
            )
        return replies
