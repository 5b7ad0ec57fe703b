"""Domain layer DI providers."""

from dishka import Scope, provide

from threadline.config import StatusSettings, ThreadingSettings
from threadline.domain.service import (
    CommentTreeService,
    StatusService,
    ThreadRootService,
)
from threadline.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider.

    Services are stateless, so REQUEST scope only keeps their lifetime
    aligned with the use cases that hold them.
    """

    scope = Scope.REQUEST

    @provide
    def get_root_service(self, settings: ThreadingSettings) -> ThreadRootService:
        """Provide thread root service."""
        return ThreadRootService(settings=settings)

    @provide
    def get_tree_service(
        self, root_service: ThreadRootService, settings: ThreadingSettings
    ) -> CommentTreeService:
        """Provide comment tree service."""
        return CommentTreeService(root_service=root_service, settings=settings)

    @provide
    def get_status_service(self, settings: StatusSettings) -> StatusService:
        """Provide status service."""
        return StatusService(settings=settings)
