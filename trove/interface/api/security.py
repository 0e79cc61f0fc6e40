"""Cookie authentication for routes."""

from trove.domain.service import JWTService
from trove.interface.error import unauthorized
from trove.util.jwt import JWTError


def authenticate(jwt_service: JWTService, auth_token: str | None) -> str:
    """Return the user ID carried by the ``auth_token`` cookie.

    Raises:
        HTTPException: 401 if the cookie is missing or the token is invalid
    """
    if not auth_token:
        raise unauthorized()

    try:
        return str(jwt_service.user_id_from_token(auth_token))
    except JWTError as e:
        raise unauthorized(str(e)) from e

