"""Domain model entities for threadline."""

from threadline.domain.model.event import Event, Tag
from threadline.domain.model.status import AuthorizationContext, StatusView
from threadline.domain.model.thread import CommentNode, count_nodes

__all__ = [
    "AuthorizationContext",
    "CommentNode",
    "Event",
    "StatusView",
    "Tag",
    "count_nodes",
]
