"""
Security utilities for password hashing and verification.
"""
from functools import lru_cache

from passlib.context import CryptContext

from marketplace.config import get_settings


@lru_cache
def get_pwd_context() -> CryptContext:
    """Password hashing context using bcrypt with the configured cost factor."""
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.bcrypt_rounds,
    )


def hash_password(plain_password: str) -> str:
    """
    Hash a plain password using bcrypt.

    A fresh random salt is generated for every call, so hashing the same
    password twice yields two different strings.

    Args:
        plain_password: The plain text password to hash

    Returns:
        Hashed password string
    """
    return get_pwd_context().hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise (including when the
        stored value is not a recognizable hash)
    """
    try:
        return get_pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False
