"""
Error Taxonomy

Domain errors raised by services and the plan status machine. The API layer
maps each family to a single response shape (see api/errors.py).
"""

from typing import Any, Iterable, Optional, Sequence

from pydantic import BaseModel


REQUEST_LOCATIONS = ("body", "query", "path", "header", "cookie")


def location_to_path(loc: Sequence[Any]) -> str:
    """Turn a pydantic error location into ``a.b[0].c`` notation."""
    parts = list(loc)
    if parts and parts[0] in REQUEST_LOCATIONS:
        parts = parts[1:]

    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path or "base"


class FieldError(BaseModel):
    """A single violated field path and the reason it was rejected."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class TripwiseError(Exception):
    """Base exception for all application errors."""
    pass


class NotFoundError(TripwiseError):
    """Raised when a record does not exist or is not owned by the caller."""

    def __init__(self, resource: str = "Resource"):
        self.resource = resource
        super().__init__(f"{resource} not found")


class ValidationError(TripwiseError):
    """Raised when input or generated content does not have the expected shape."""

    def __init__(self, errors: Iterable[FieldError]):
        self.errors = list(errors)
        super().__init__(", ".join(str(e) for e in self.errors) or "Validation failed")

    @classmethod
    def single(cls, field: str, reason: str) -> "ValidationError":
        return cls([FieldError(field=field, reason=reason)])


class PlanContentError(ValidationError):
    """Raised by the plan content validator."""
    pass


class IllegalTransitionError(TripwiseError):
    """Raised when a plan status transition is not allowed from its current status."""

    def __init__(self, current: str, action: str, detail: Optional[str] = None):
        self.current = current
        self.action = action
        message = f"Cannot {action} a plan in status '{current}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidOperationError(TripwiseError):
    """Raised when an operation is not meaningful for the plan's current status."""
    pass


class ProviderError(TripwiseError):
    """Raised when the external plan generation provider fails."""
    pass
