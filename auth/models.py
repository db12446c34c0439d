"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in tasks/models.py -- dataclasses own domain shape; stores and routes do the
work.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    email is unique and compared case-sensitively, exactly as stored.
    password_hash is a bcrypt digest. It never leaves the auth package: no
    response model has a field for it and nothing logs it.

    id and created_at are None before the record is written to the database.
    """

    email: str
    password_hash: str
    id: int | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class Identity:
    """The verified claim carried by a bearer token.

    Produced only by TokenService.verify() and injected into protected routes
    by auth.dependencies.get_current_identity(). Frozen so a handler cannot
    rewrite the owner it was given.
    """

    user_id: int
    email: str
