"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from threadline.config import Settings
from threadline.util.di import PROVIDERS
from threadline.util.di.core import ProdConfigProvider


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the application container.

    Args:
        settings: Explicit settings; loaded from the environment if omitted

    Returns:
        Configured DI container
    """
    provider_instances = [
        ProdConfigProvider(settings) if base is ProdConfigProvider else base()
        for base in PROVIDERS
    ]
    return make_async_container(*provider_instances)
