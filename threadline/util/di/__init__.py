"""Dependency injection module."""

from typing import Type

from threadline.util.di.application import ProdApplicationProvider
from threadline.util.di.base import ProviderBase
from threadline.util.di.core import ProdConfigProvider
from threadline.util.di.domain import ProdDomainProvider
from threadline.util.di.infrastructure import PersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]

__all__ = [
    "PROVIDERS",
    "ProviderBase",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "PersistenceProvider",
]
