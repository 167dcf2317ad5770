"""Error hierarchy for Pulse.

Error layers:
- PulseError: Base class for all Pulse errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class PulseError(Exception):
    """Base class for all Pulse errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(PulseError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None, code: str | None = None) -> None:
        super().__init__(message, code=code or "VALIDATION_ERROR")
        self.field = field


class InvalidFilterError(ValidationError):
    """A listing or deletion filter names a key outside the data source schema."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, field=field, code="invalid_filter")


class UnknownReferenceError(DomainError):
    """A write references a parent row that does not exist."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="unknown_reference")


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class AuthorizationError(DomainError):
    """User not authorized for this operation."""


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(PulseError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Database is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
