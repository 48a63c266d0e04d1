class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidShiftOrderError(ValidationError):
    """Raised when a clock-out is not strictly after its clock-in."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidStateError(DomainError):
    """Raised when a correction session is used outside its allowed states."""


class RecordNotFoundError(DomainError):
    """Raised when a shift record or employee does not exist."""
