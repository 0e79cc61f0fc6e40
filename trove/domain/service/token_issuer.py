"""Invitation token issuer."""

import hashlib
import secrets

from pydantic import Field

from trove.domain.value import InvitationToken
from trove.domain.value.common import ValueObject

from .base import Service


class IssuedToken(ValueObject):
    """Freshly minted token and the digest stored in its place."""

    token: InvitationToken
    digest: str = Field(min_length=64, max_length=64)


class TokenIssuer(Service):
    """Mints unguessable bearer tokens for invitations.

    Tokens carry ``nbytes`` of randomness from ``secrets`` (32 bytes gives
    256 bits). Only the SHA-256 digest is persisted, so a database leak
    does not expose usable links.
    """

    def __init__(self, nbytes: int = 32) -> None:
        if nbytes < 32:
            raise ValueError("Invitation tokens need at least 32 bytes of entropy")
        self.nbytes = nbytes

    def issue(self) -> IssuedToken:
        """Mint a new token."""
        token = InvitationToken(root=secrets.token_urlsafe(self.nbytes))
        return IssuedToken(token=token, digest=self.digest(token))

    @staticmethod
    def digest(token: InvitationToken) -> str:
        """Lookup digest for a presented token."""
        return hashlib.sha256(token.root.encode("utf-8")).hexdigest()
