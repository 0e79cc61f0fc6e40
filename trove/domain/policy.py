"""Role policy for community and invitation actions.

Pure functions over ``(community, acting user, action)``. Nothing here
touches storage; callers load the aggregates and ask before mutating.
"""

from enum import Enum
from typing import assert_never

from trove.domain.error import ForbiddenError
from trove.domain.model import Community, Invitation, User
from trove.domain.value import CommunityRole, UserId


class CommunityAction(str, Enum):
    """Actions gated by a member's role."""

    UPDATE = "update"
    DELETE = "delete"
    JOIN = "join"
    LEAVE = "leave"
    INVITE = "invite"
    VIEW_INVITATIONS = "view_invitations"
    CHANGE_ROLE = "change_role"


def _is_staff(role: CommunityRole | None) -> bool:
    match role:
        case CommunityRole.ADMIN | CommunityRole.MODERATOR:
            return True
        case CommunityRole.MEMBER | None:
            return False
        case _:
            assert_never(role)


def is_allowed(community: Community, user_id: UserId, action: CommunityAction) -> bool:
    """Decide whether ``user_id`` may perform ``action`` on ``community``."""
    role = community.role_of(user_id)
    match action:
        case CommunityAction.UPDATE | CommunityAction.CHANGE_ROLE:
            return role is CommunityRole.ADMIN
        case CommunityAction.DELETE:
            return community.is_creator(user_id)
        case CommunityAction.JOIN:
            return role is None
        case CommunityAction.LEAVE:
            return role is not None and not community.is_creator(user_id)
        case CommunityAction.INVITE | CommunityAction.VIEW_INVITATIONS:
            return _is_staff(role)
        case _:
            assert_never(action)


def _denial_message(action: CommunityAction) -> str:
    match action:
        case CommunityAction.UPDATE:
            return "Only admins can update the community"
        case CommunityAction.DELETE:
            return "Only the creator can delete the community"
        case CommunityAction.JOIN:
            return "User cannot join this community"
        case CommunityAction.LEAVE:
            return "Only members other than the creator can leave the community"
        case CommunityAction.INVITE:
            return "Only admins and moderators can send invitations"
        case CommunityAction.VIEW_INVITATIONS:
            return "Only admins and moderators can view invitations"
        case CommunityAction.CHANGE_ROLE:
            return "Only admins can change member roles"
        case _:
            assert_never(action)


def authorize(community: Community, user_id: UserId, action: CommunityAction) -> None:
    """Raise unless the action is allowed.

    Raises:
        ForbiddenError: If the acting user's role does not allow the action
    """
    if not is_allowed(community, user_id, action):
        raise ForbiddenError(_denial_message(action))


def authorize_role_change(
    community: Community, actor_id: UserId, target_id: UserId
) -> None:
    """Admins may change roles of anyone except the creator.

    Raises:
        ForbiddenError: If the actor is not an admin or the target is the creator
    """
    authorize(community, actor_id, CommunityAction.CHANGE_ROLE)
    if community.is_creator(target_id):
        raise ForbiddenError("The creator's role cannot be changed")


def authorize_cancel(invitation: Invitation, user_id: UserId) -> None:
    """Only the original inviter may cancel an invitation."""
    if invitation.inviter_id != user_id:
        raise ForbiddenError("You can only cancel your own invitations")


def authorize_accept(invitation: Invitation, user: User) -> None:
    """Only the account whose email was invited may accept."""
    if user.email != invitation.invitee_email:
        raise ForbiddenError("Email does not match invitation")
