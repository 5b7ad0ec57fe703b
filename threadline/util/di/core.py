"""Core DI providers."""

from dishka import Scope, provide

from threadline.config import Settings, StatusSettings, ThreadingSettings
from threadline.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider.

    Settings are loaded from environment variables and .env file unless an
    explicit Settings instance is passed in.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self._settings = settings

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return self._settings or Settings()

    @provide(scope=Scope.APP)
    def provide_threading_settings(self, settings: Settings) -> ThreadingSettings:
        """Provide threading settings."""
        return settings.threading

    @provide(scope=Scope.APP)
    def provide_status_settings(self, settings: Settings) -> StatusSettings:
        """Provide status settings."""
        return settings.status
