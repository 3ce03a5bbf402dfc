"""
Tests for the pre-write pipeline (password hashing step).

The step is a pure function over PendingWrite, so no database is needed.
"""

import pytest

from marketplace.core.errors import PasswordHashingError
from marketplace.core.pipeline import PendingWrite, hash_password_step, run_pre_write
from marketplace.core.security import verify_password


def fake_hasher(value: str) -> str:
    return f"hashed:{value}"


class TestHashPasswordStep:
    """Tests for hash_password_step."""

    def test_unmodified_password_passes_through(self):
        """A write that does not touch the password is returned as is."""
        pending = PendingWrite(
            document={"email": "a@example.com", "password": "$2b$10$existinghash"},
            modified=frozenset({"firstName"}),
        )

        result = hash_password_step(pending, hasher=fake_hasher)

        assert result is pending
        assert result.document["password"] == "$2b$10$existinghash"

    def test_modified_password_is_replaced_by_hash(self):
        pending = PendingWrite(
            document={"email": "a@example.com", "password": "plain-secret"},
            modified=frozenset({"password"}),
        )

        result = hash_password_step(pending, hasher=fake_hasher)

        assert result.document["password"] == "hashed:plain-secret"
        assert result.modified == pending.modified

    def test_original_write_is_not_mutated(self):
        pending = PendingWrite(
            document={"password": "plain-secret"},
            modified=frozenset({"password"}),
        )

        hash_password_step(pending, hasher=fake_hasher)

        assert pending.document["password"] == "plain-secret"

    def test_default_hasher_produces_verifiable_bcrypt_hash(self):
        pending = PendingWrite(
            document={"password": "plain-secret"},
            modified=frozenset({"password"}),
        )

        result = hash_password_step(pending)

        assert result.document["password"] != "plain-secret"
        assert verify_password("plain-secret", result.document["password"])

    def test_hasher_failure_raises_hashing_error(self):
        """A failing hasher aborts the write with a distinct error."""
        def broken_hasher(value: str) -> str:
            raise RuntimeError("no entropy")

        pending = PendingWrite(
            document={"password": "plain-secret"},
            modified=frozenset({"password"}),
        )

        with pytest.raises(PasswordHashingError):
            hash_password_step(pending, hasher=broken_hasher)

        assert pending.document["password"] == "plain-secret"

    def test_run_pre_write_skips_hashing_for_other_fields(self):
        pending = PendingWrite(
            document={"password": "$2b$10$existinghash", "suspended": True},
            modified=frozenset({"suspended"}),
        )

        assert run_pre_write(pending).document["password"] == "$2b$10$existinghash"
