"""Status use cases."""

from .get_item_status import (
    GetItemStatusRequest,
    GetItemStatusResponse,
    GetItemStatusUseCase,
)

__all__ = ["GetItemStatusRequest", "GetItemStatusResponse", "GetItemStatusUseCase"]
