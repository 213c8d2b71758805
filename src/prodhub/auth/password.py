"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks. Every call to
hash_password() draws a fresh salt, so re-hashing the same password yields
a different string.

The work factor comes from settings.bcrypt_rounds (10 by default, ~60ms
per hash). Callers in async code should run these through a threadpool.
"""

from functools import lru_cache
from typing import Optional

import bcrypt

from prodhub.config import settings

# bcrypt only looks at the first 72 bytes
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt. Produces hashes starting with "$2b$"."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("dummy-password-for-timing")


def burn_verification() -> None:
    """Spend the same bcrypt work as a real check, then fail.

    Used when the email is unknown, so "no such account" takes as long
    as "wrong password" and the two can't be told apart by timing.
    """
    bcrypt.checkpw(b"not-the-password", _dummy_hash().encode("utf-8"))
