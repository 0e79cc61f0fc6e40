"""Domain services."""

from .base import Service
from .clock import Clock, FrozenClock, SystemClock
from .community_service import CommunityService
from .invitation_service import (
    AcceptedInvitation,
    InvitationService,
    InvitationView,
    IssuedInvitation,
)
from .jwt_service import JWTService
from .notification import InvitationNotice, NotificationDispatcher
from .token_issuer import IssuedToken, TokenIssuer
from .user_service import UserService

__all__ = [
    "AcceptedInvitation",
    "Clock",
    "CommunityService",
    "FrozenClock",
    "InvitationNotice",
    "InvitationService",
    "InvitationView",
    "IssuedInvitation",
    "IssuedToken",
    "JWTService",
    "NotificationDispatcher",
    "Service",
    "SystemClock",
    "TokenIssuer",
    "UserService",
]
