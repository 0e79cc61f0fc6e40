"""Shared state for the in-memory repositories."""

from dataclasses import dataclass, field

from trove.domain.model import Community, Invitation, User
from trove.domain.value import CommunityId, InvitationId, UserId


@dataclass
class Snapshot:
    users: dict[UserId, User]
    communities: dict[CommunityId, Community]
    invitations: dict[InvitationId, Invitation]


@dataclass
class InMemoryStore:
    """Tables of the in-memory backend.

    Repositories for one test share a store so that a unit of work can
    snapshot and restore every aggregate at once. Models are immutable,
    so a shallow copy of each dict is a full snapshot.
    """

    users: dict[UserId, User] = field(default_factory=dict)
    communities: dict[CommunityId, Community] = field(default_factory=dict)
    invitations: dict[InvitationId, Invitation] = field(default_factory=dict)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            users=dict(self.users),
            communities=dict(self.communities),
            invitations=dict(self.invitations),
        )

    def restore(self, snapshot: Snapshot) -> None:
        self.users = dict(snapshot.users)
        self.communities = dict(snapshot.communities)
        self.invitations = dict(snapshot.invitations)
