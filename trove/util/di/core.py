"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from trove.config import (
    APISettings,
    AuthSettings,
    CommunitySettings,
    EmailSettings,
    InvitationSettings,
    Settings,
)
from trove.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Sections are provided separately so services depend only on what they use.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_api_settings(self, settings: Settings) -> APISettings:
        return settings.api

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_community_settings(self, settings: Settings) -> CommunitySettings:
        return settings.community

    @provide(scope=Scope.APP)
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        return settings.email
