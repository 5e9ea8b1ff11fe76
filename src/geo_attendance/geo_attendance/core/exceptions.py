class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class LocationUnavailableError(DomainError):
    """Raised when no position could be obtained (denied or timed out)."""


class NotCheckedInError(DomainError):
    """Raised on check-out when there is no open record for the day."""


class AlreadyCheckedOutError(DomainError):
    """Raised on check-out when the day's record is already closed."""


class DuplicateRecordError(DomainError):
    """Raised by a store when a record for the key already exists."""


class RecordNotFoundError(DomainError):
    """Raised when an attendance record id cannot be resolved."""


class UserNotFoundError(DomainError):
    """Raised when a user id or email cannot be resolved."""
