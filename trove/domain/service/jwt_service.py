"""JWT token domain service."""

from uuid import UUID

import logfire

from trove.config import AuthSettings
from trove.domain.value import UserId
from trove.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, username: str) -> str:
        """Create JWT token for user.

        Args:
            user_id: User ID
            username: Username

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=str(user_id)):
            token = create_token(str(user_id), username, self.auth_settings)
            logfire.info("JWT token created", user_id=str(user_id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def user_id_from_token(self, token: str) -> UserId:
        """Verify a token and return the user it was issued to.

        Raises:
            JWTError: If the token is invalid, expired or malformed
        """
        payload = self.verify_token(token)
        try:
            return UserId(UUID(payload.user_id))
        except ValueError:
            raise JWTError("Invalid token subject")
