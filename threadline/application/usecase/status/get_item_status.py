"""Get item status use case."""

from pydantic import BaseModel

from threadline.application.usecase.base import BaseUseCase
from threadline.config import StatusSettings
from threadline.domain import tags
from threadline.domain.error import NotFoundError
from threadline.domain.repository import EventRepository
from threadline.domain.service import StatusService
from threadline.domain.value import EventId, StatusLabel, kinds


class GetItemStatusRequest(BaseModel):
    """Get item status request."""

    item_id: str  # Issue, patch or pull request event id


class GetItemStatusResponse(BaseModel):
    """Get item status response."""

    item_id: str
    item_kind: int
    label: StatusLabel
    status_event_id: str | None  # None for the implicit open state
    status_kind: int | None
    is_default: bool
    # False while the repository is unresolved; re-run once it arrives
    context_complete: bool


class GetItemStatusUseCase(BaseUseCase[GetItemStatusRequest, GetItemStatusResponse]):
    """Use case for reporting the current status of a tracked item."""

    def __init__(
        self,
        event_repository: EventRepository,
        status_service: StatusService,
        status_settings: StatusSettings,
    ) -> None:
        """Initialize get item status use case.

        Args:
            event_repository: Snapshot of delivered events
            status_service: Status domain service
            status_settings: Status settings (query limit)
        """
        self.event_repository = event_repository
        self.status_service = status_service
        self.status_settings = status_settings

    async def execute(self, request: GetItemStatusRequest) -> GetItemStatusResponse:
        """Execute get item status flow.

        Steps:
        1. Load the item
        2. Load its repository from the item's "a" tag, if delivered
        3. Collect status events referencing the item
        4. Resolve and label the current status

        Args:
            request: Get item status request

        Returns:
            Current status with label and context completeness

        Raises:
            NotFoundError: If the item has not been delivered
            NotTrackableError: If the event is not an issue, patch or pull request
        """
        item = await self.event_repository.find_by_id(EventId(request.item_id))
        if item is None:
            raise NotFoundError("Event", request.item_id)

        address = tags.repository_address(item)
        repository = (
            await self.event_repository.find_by_address(address) if address else None
        )
        context = self.status_service.authorization_context(item, repository)

        candidates = await self.event_repository.find_referencing(
            kinds=sorted(kinds.STATUS_KINDS),
            tag_name="e",
            values=[item.id],
            limit=self.status_settings.query_limit,
        )
        view = self.status_service.current_status(item, context, candidates)

        return GetItemStatusResponse(
            item_id=item.id,
            item_kind=item.kind,
            label=view.label,
            status_event_id=view.status.id if view.status else None,
            status_kind=view.kind,
            is_default=view.is_default,
            context_complete=context.complete,
        )
