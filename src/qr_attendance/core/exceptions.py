class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NoCodeError(ValidationError):
    """Raised when a decode event carries no payload."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class PersistenceError(DomainError):
    """Raised when the underlying store fails on read or write."""
