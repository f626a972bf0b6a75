class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is missing or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataIntegrityError(DomainError):
    """Raised when a mutation would break a system-wide invariant (e.g. no CEO left)."""


class ExternalServiceError(DomainError):
    """Raised by external collaborators (AI, media devices) before being degraded to a fallback."""
