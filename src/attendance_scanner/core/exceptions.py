class DomainError(Exception):
    """Base exception for business rule violations.

    ``reason`` is a stable code surfaced to operators; ``retryable`` tells the
    workflow whether repeating the same physical scan may succeed.
    """

    reason = "domain_error"
    retryable = False


class ValidationError(DomainError):
    """Raised when input data (token, timestamp, settings) is invalid."""

    reason = "validation"


class NotFoundError(DomainError):
    """Raised when a scanned token does not resolve to a known person."""

    reason = "not_found"


class DuplicateScanError(DomainError):
    """Raised when a record already exists for the person on that day."""

    reason = "duplicate_scan"


class InvalidTransitionError(DomainError):
    """Raised when a workflow command is not allowed in the current state."""

    reason = "invalid_transition"


class CollaboratorUnavailableError(DomainError):
    """An external collaborator (store, identity lookup) failed transiently."""

    reason = "unavailable"
    retryable = True


class StoreUnavailableError(CollaboratorUnavailableError):
    """Raised when the attendance store cannot be reached."""

    reason = "store_unavailable"


class IdentityUnavailableError(CollaboratorUnavailableError):
    """Raised when the identity lookup cannot be reached."""

    reason = "identity_unavailable"


class CollaboratorTimeoutError(DomainError):
    """Raised when a collaborator call exceeds its configured timeout."""

    reason = "timeout"
    retryable = True
