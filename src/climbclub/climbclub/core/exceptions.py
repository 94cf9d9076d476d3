class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class NotFoundError(DomainError):
    """Raised when a member or session id does not exist."""

    kind = "not_found"


class CapacityExceededError(DomainError):
    """Raised when a not-yet-registered member tries to join a full session."""

    kind = "capacity_exceeded"


class AlreadyExistsError(DomainError):
    """Raised when creating something that must be unique but already exists."""

    kind = "already_exists"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    kind = "authorization_error"


class StorageError(Exception):
    """Opaque failure reading or writing the backing store."""

    kind = "storage_error"
