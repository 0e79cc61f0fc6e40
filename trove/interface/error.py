"""Mapping of domain errors to HTTP responses."""

from fastapi import HTTPException, status

from trove.domain.error import (
    ConflictError,
    DomainError,
    ExpiredError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    match error:
        case NotFoundError():
            return status.HTTP_404_NOT_FOUND
        case ForbiddenError():
            return status.HTTP_403_FORBIDDEN
        case ConflictError():
            return status.HTTP_409_CONFLICT
        case ExpiredError():
            return status.HTTP_410_GONE
        case ValidationError():
            return status.HTTP_422_UNPROCESSABLE_ENTITY
        case _:
            return status.HTTP_400_BAD_REQUEST


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to a response with a stable ``kind``.

    The detail is ``{"kind": ..., "message": ...}`` so clients can branch
    on the kind without parsing messages.
    """
    return HTTPException(
        status_code=status_for(error),
        detail={"kind": error.kind, "message": error.message},
    )


def unauthorized(message: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"kind": "unauthorized", "message": message},
    )
