"""Comment thread nodes.

A thread is a forest of CommentNode values hanging off a root pointer.
Nodes are rebuilt from scratch on every resolution and never mutated, so
a forest can be handed to renderers as-is.
"""

from pydantic import Field

from threadline.domain.model.common import DomainModel
from threadline.domain.model.event import Event


class CommentNode(DomainModel):
    """Node in a comment thread.

    Threading is derived entirely from the event tags:
    - children: Direct replies, oldest first (id as tiebreaker)
    - depth: Nesting level (0 for replies to the root)
    """

    event: Event
    children: tuple["CommentNode", ...] = ()
    depth: int = Field(default=0, ge=0)

    def walk(self):
        """Yield this node and all descendants in display order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


CommentNode.model_rebuild()


def count_nodes(forest: tuple[CommentNode, ...]) -> int:
    """Count every node in a forest."""
    return sum(1 for root in forest for _ in root.walk())
