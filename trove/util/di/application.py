"""Application layer DI providers."""

from dishka import Scope, provide

from trove.application.usecase.community import (
    ChangeMemberRoleUseCase,
    CreateCommunityUseCase,
    DeleteCommunityUseCase,
    GetCommunityUseCase,
    JoinCommunityUseCase,
    LeaveCommunityUseCase,
    ListCommunitiesUseCase,
    ListMyCommunitiesUseCase,
    UpdateCommunityUseCase,
)
from trove.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    DeclineInvitationUseCase,
    ExpireInvitationsUseCase,
    GetInvitationUseCase,
    ListCommunityInvitationsUseCase,
    ListMyInvitationsUseCase,
)
from trove.domain.service import CommunityService, InvitationService, UserService
from trove.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Community use cases
    @provide(scope=Scope.REQUEST)
    def get_create_community_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> CreateCommunityUseCase:
        """Provide create community use case."""
        return CreateCommunityUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_community_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> GetCommunityUseCase:
        """Provide get community use case."""
        return GetCommunityUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_communities_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> ListCommunitiesUseCase:
        """Provide list communities use case."""
        return ListCommunitiesUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_my_communities_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> ListMyCommunitiesUseCase:
        """Provide list my communities use case."""
        return ListMyCommunitiesUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_community_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> UpdateCommunityUseCase:
        """Provide update community use case."""
        return UpdateCommunityUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_community_use_case(
        self, community_service: CommunityService
    ) -> DeleteCommunityUseCase:
        """Provide delete community use case."""
        return DeleteCommunityUseCase(community_service=community_service)

    @provide(scope=Scope.REQUEST)
    def get_join_community_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> JoinCommunityUseCase:
        """Provide join community use case."""
        return JoinCommunityUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_leave_community_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> LeaveCommunityUseCase:
        """Provide leave community use case."""
        return LeaveCommunityUseCase(
            community_service=community_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_change_member_role_use_case(
        self, community_service: CommunityService, user_service: UserService
    ) -> ChangeMemberRoleUseCase:
        """Provide change member role use case."""
        return ChangeMemberRoleUseCase(
            community_service=community_service, user_service=user_service
        )

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self,
        invitation_service: InvitationService,
        community_service: CommunityService,
        user_service: UserService,
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service,
            community_service=community_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> GetInvitationUseCase:
        """Provide get invitation by token use case."""
        return GetInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_decline_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> DeclineInvitationUseCase:
        """Provide decline invitation use case."""
        return DeclineInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_cancel_invitation_use_case(
        self, invitation_service: InvitationService
    ) -> CancelInvitationUseCase:
        """Provide cancel invitation use case."""
        return CancelInvitationUseCase(invitation_service=invitation_service)

    @provide(scope=Scope.REQUEST)
    def get_list_community_invitations_use_case(
        self,
        invitation_service: InvitationService,
        community_service: CommunityService,
        user_service: UserService,
    ) -> ListCommunityInvitationsUseCase:
        """Provide list community invitations use case."""
        return ListCommunityInvitationsUseCase(
            invitation_service=invitation_service,
            community_service=community_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_my_invitations_use_case(
        self,
        invitation_service: InvitationService,
        community_service: CommunityService,
        user_service: UserService,
    ) -> ListMyInvitationsUseCase:
        """Provide list my invitations use case."""
        return ListMyInvitationsUseCase(
            invitation_service=invitation_service,
            community_service=community_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_expire_invitations_use_case(
        self, invitation_service: InvitationService
    ) -> ExpireInvitationsUseCase:
        """Provide expire invitations use case."""
        return ExpireInvitationsUseCase(invitation_service=invitation_service)
