"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for events, thread nodes and status results.

    Everything the engine derives is rebuilt from scratch on each call and
    handed to renderers as-is, so models are frozen and hashable.
    """

    model_config = ConfigDict(frozen=True)
