"""Base model for all domain entities."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from trove.domain.error import ValidationError


class DomainModel(BaseModel):
    """Base class for all domain models.

    Domain models are immutable; changes produce new instances through
    ``revise`` so that field validators and invariants run every time.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    def revise(self, **changes: Any):
        """Return a re-validated copy with ``changes`` applied.

        Raises:
            ValidationError: If the result violates a field rule or invariant
        """
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        try:
            return type(self).model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(describe_validation_error(e)) from e


def describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into one readable message."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        message = detail["msg"].removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
