"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ForbiddenError(DomainError):
    """Entity exists but belongs to another user."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationRequiredError(DomainError):
    """Operation was attempted without an authenticated user."""


class StoreError(DomainError):
    """Persistence layer failed to complete the operation."""
