"""Domain layer DI providers."""

from dishka import Scope, provide

from trove.config import (
    APISettings,
    AuthSettings,
    CommunitySettings,
    InvitationSettings,
)
from trove.domain.repository import (
    CommunityRepository,
    InvitationRepository,
    UnitOfWork,
    UserRepository,
)
from trove.domain.service import (
    Clock,
    CommunityService,
    InvitationService,
    JWTService,
    NotificationDispatcher,
    TokenIssuer,
    UserService,
)
from trove.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_token_issuer(self) -> TokenIssuer:
        """Provide invitation token issuer (stateless)."""
        return TokenIssuer()

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_community_service(
        self,
        community_repository: CommunityRepository,
        invitation_repository: InvitationRepository,
        unit_of_work: UnitOfWork,
        clock: Clock,
        community_settings: CommunitySettings,
    ) -> CommunityService:
        """Provide community domain service."""
        return CommunityService(
            community_repository=community_repository,
            invitation_repository=invitation_repository,
            unit_of_work=unit_of_work,
            clock=clock,
            max_write_attempts=community_settings.max_write_attempts,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        community_service: CommunityService,
        user_service: UserService,
        token_issuer: TokenIssuer,
        dispatcher: NotificationDispatcher,
        unit_of_work: UnitOfWork,
        clock: Clock,
        invitation_settings: InvitationSettings,
        api_settings: APISettings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            community_service=community_service,
            user_service=user_service,
            token_issuer=token_issuer,
            dispatcher=dispatcher,
            unit_of_work=unit_of_work,
            clock=clock,
            invitation_settings=invitation_settings,
            api_settings=api_settings,
        )
