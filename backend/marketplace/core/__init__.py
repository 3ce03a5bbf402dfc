"""
Core module - Password security, flash notices and the domain error taxonomy.
"""
from marketplace.core.security import (
    hash_password,
    verify_password,
)
from marketplace.core.flash import flash, get_flashed_messages
from marketplace.core.errors import (
    MarketplaceError,
    DocumentValidationError,
    DuplicateEmailError,
    PasswordHashingError,
    NotFoundError,
    PermissionDeniedError,
    InvalidCredentialsError,
    AccountLockedError,
    AlreadyAdminError,
)

__all__ = [
    "hash_password",
    "verify_password",
    "flash",
    "get_flashed_messages",
    "MarketplaceError",
    "DocumentValidationError",
    "DuplicateEmailError",
    "PasswordHashingError",
    "NotFoundError",
    "PermissionDeniedError",
    "InvalidCredentialsError",
    "AccountLockedError",
    "AlreadyAdminError",
]
