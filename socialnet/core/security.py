"""Security helpers (hashing and verification)."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc

_ph = PasswordHasher()
# Verified against when the e-mail is unknown so both login failures cost the same.
_DUMMY_HASH = _ph.hash("socialnet-dummy-password")


def hash_password(password: str) -> str:
    """Create a salted Argon2 hash."""
    return _ph.hash(password)


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored:
        return False
    try:
        return _ph.verify(stored, password)
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def burn_verification(password: str) -> None:
    verify_password(password, _DUMMY_HASH)
