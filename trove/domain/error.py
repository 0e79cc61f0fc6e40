"""Domain layer errors.

Every error carries a stable ``kind`` so the interface layer can map it
to a response without inspecting messages.
"""

from typing import ClassVar


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[str] = "domain"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed field value (bad enum, email format, length bounds)."""

    kind = "validation"


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(DomainError):
    """Raised when the acting user's role does not allow the action."""

    kind = "forbidden"


class ConflictError(DomainError):
    """Raised when an action collides with current state.

    Duplicate membership, duplicate pending invitation, acting on a
    terminal invitation or losing an optimistic-concurrency race.
    """

    kind = "conflict"


class ExpiredError(DomainError):
    """Raised when an invitation is used at or after its deadline."""

    kind = "expired"

    def __init__(self, message: str = "Invitation has expired"):
        super().__init__(message)
