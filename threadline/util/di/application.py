"""Application layer DI providers."""

from dishka import Scope, provide

from threadline.application.usecase.status import GetItemStatusUseCase
from threadline.application.usecase.thread import GetThreadUseCase
from threadline.config import StatusSettings
from threadline.domain.repository import EventRepository
from threadline.domain.service import (
    CommentTreeService,
    StatusService,
    ThreadRootService,
)
from threadline.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider."""

    @provide(scope=Scope.REQUEST)
    def get_thread_use_case(
        self,
        event_repository: EventRepository,
        root_service: ThreadRootService,
        tree_service: CommentTreeService,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            event_repository=event_repository,
            root_service=root_service,
            tree_service=tree_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_item_status_use_case(
        self,
        event_repository: EventRepository,
        status_service: StatusService,
        status_settings: StatusSettings,
    ) -> GetItemStatusUseCase:
        """Provide get item status use case."""
        return GetItemStatusUseCase(
            event_repository=event_repository,
            status_service=status_service,
            status_settings=status_settings,
        )
