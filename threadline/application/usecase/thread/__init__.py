"""Thread use cases."""

from .get_thread import (
    CommentNodeResponse,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)

__all__ = [
    "CommentNodeResponse",
    "GetThreadRequest",
    "GetThreadResponse",
    "GetThreadUseCase",
]
