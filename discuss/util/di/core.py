"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from discuss.config import (
    AuthSettings,
    ModerationSettings,
    RateLimitSettings,
    Settings,
)
from discuss.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        """Provide submission quota settings."""
        return settings.rate_limit

    @provide(scope=Scope.APP)
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        """Provide content filter settings."""
        return settings.moderation
