"""Domain services."""

from .base import Service
from .root_service import ThreadRootService
from .status_service import StatusService
from .tree_service import CommentTreeService

__all__ = [
    "CommentTreeService",
    "Service",
    "StatusService",
    "ThreadRootService",
]
