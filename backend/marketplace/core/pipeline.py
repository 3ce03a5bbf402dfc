"""
Pre-write pipeline for user documents.

Every write to the users collection is described as a PendingWrite and
passed through the steps here before it reaches MongoDB.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from marketplace.core.errors import PasswordHashingError
from marketplace.core.security import hash_password

logger = logging.getLogger(__name__)

PASSWORD_FIELD = "password"


@dataclass(frozen=True)
class PendingWrite:
    """
    A write that has not been committed yet.

    Attributes:
        document: Stored field names mapped to the values the write sets
        modified: Stored field names the write changes
    """
    document: dict[str, Any]
    modified: frozenset[str] = field(default_factory=frozenset)

    def is_modified(self, field_name: str) -> bool:
        return field_name in self.modified


def hash_password_step(
    pending: PendingWrite,
    hasher: Optional[Callable[[str], str]] = None,
) -> PendingWrite:
    """
    Replace a changed plaintext password with its salted hash.

    Writes that do not touch the password pass through untouched, so saving
    an account again never re-hashes an existing hash.

    Raises:
        PasswordHashingError: if hashing fails; the pending write is not
            modified
    """
    if not pending.is_modified(PASSWORD_FIELD):
        return pending

    logger.info("Hashing password for user: %s", pending.document.get("email", "<unknown>"))
    hasher = hasher or hash_password
    try:
        hashed = hasher(pending.document[PASSWORD_FIELD])
    except Exception as e:
        logger.error("Error hashing password: %s", e)
        raise PasswordHashingError("Failed to hash password") from e

    return replace(pending, document={**pending.document, PASSWORD_FIELD: hashed})


PRE_WRITE_STEPS: tuple[Callable[[PendingWrite], PendingWrite], ...] = (hash_password_step,)


def run_pre_write(pending: PendingWrite) -> PendingWrite:
    """Run every pre-write step in order."""
    for step in PRE_WRITE_STEPS:
        pending = step(pending)
    return pending
