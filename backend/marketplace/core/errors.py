"""
Domain error taxonomy.

Every error derives from ValueError so service callers can keep catching
ValueError the same way they always have, while routers map the concrete
subclasses to specific status codes.
"""
from typing import Any, Optional


class MarketplaceError(ValueError):
    """Base class for all domain errors."""


class DocumentValidationError(MarketplaceError):
    """A document is missing a required field or has a value outside its enum."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class DuplicateEmailError(MarketplaceError):
    """Another account already uses this email."""

    def __init__(self, email: str):
        super().__init__("Email already registered")
        self.email = email


class PasswordHashingError(MarketplaceError):
    """Salt generation or hashing failed; the write was aborted."""


class NotFoundError(MarketplaceError):
    """A referenced document does not exist."""


class PermissionDeniedError(MarketplaceError):
    """The acting admin lacks the permission an action requires."""


class InvalidCredentialsError(MarketplaceError):
    """Email/password pair did not match an account."""


class AccountLockedError(MarketplaceError):
    """The account is suspended or under an active ban."""


class AlreadyAdminError(MarketplaceError):
    """The user already has an admin assignment."""
