class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "ValidationError"


class AuthenticationError(DomainError):
    """Raised when credentials or bearer tokens are invalid."""

    kind = "AuthError"


class AuthorizationError(DomainError):
    """Raised when an account lacks permission for an action."""

    kind = "Forbidden"


class NotFoundError(DomainError):
    """Raised when a referenced employee or record does not exist."""

    kind = "NotFound"


class ConflictError(DomainError):
    """Raised when an action conflicts with the current state of a record."""

    kind = "Conflict"


class AlreadyCompletedError(ConflictError):
    """Entry and exit were already punched for the date."""

    kind = "AlreadyCompleted"


class AlreadyAbsentError(ConflictError):
    """The employee is marked absent for the date."""

    kind = "AlreadyAbsent"


class DuplicateRecordError(ConflictError):
    """A record for the same (employee, date) already exists in storage."""

    kind = "Conflict"
