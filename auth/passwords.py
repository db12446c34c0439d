"""
auth/passwords.py -- bcrypt password hashing and verification.

Bcrypt is the right choice for low-entropy secrets (passwords) because its
cost factor makes brute-force expensive. The salt is generated per call and
embedded in the digest, so hashing the same password twice yields two
different digests and verify_password() needs nothing but the digest.

Using bcrypt directly rather than passlib[bcrypt]: passlib's wrap-bug
detection feeds bcrypt a password longer than 72 bytes, which bcrypt 4.x+
rejects.

The work factor is a parameter. AuthService receives Settings.bcrypt_rounds
from the lifespan in api/main.py and passes it in; nothing here reads
configuration.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

import bcrypt

from core.config import DEFAULT_BCRYPT_ROUNDS, MIN_BCRYPT_ROUNDS
from core.errors import ValidationError

# bcrypt only looks at the first 72 bytes of input. Longer passwords are
# refused instead of being silently truncated.
MAX_PASSWORD_BYTES = 72


def hash_password(plain: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Return a salted bcrypt digest of the given plaintext password."""
    if rounds < MIN_BCRYPT_ROUNDS:
        raise ValueError(f"bcrypt rounds must be at least {MIN_BCRYPT_ROUNDS}.")
    raw = plain.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt digest.

    Any failure inside bcrypt (malformed digest, over-long input) is a
    mismatch. The exception is dropped rather than re-raised because its
    message can echo the digest.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False

