"""
auth/store.py -- SQLAlchemy Core persistence layer for user credentials.

Pattern: Repository + Data Mapper (same as tasks/store.py).
UserStore is the repository; _row_to_user is the mapper. Route and service
code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  Email uniqueness is enforced by the UNIQUE constraint on users.email, not by
  a read-before-write check. create_user() lets IntegrityError propagate so
  two concurrent registrations for one email cannot both succeed; the caller
  decides what the violation means.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from auth.models import User
from core.database import now_iso, users


class UserStore:
    """Repository for User entities.

    Users are created by registration and then only read. There is no update
    or delete path.

    Usage:
        store = UserStore(make_engine("sqlite:///:memory:"))
        user = store.create_user("a@x.com", hash_password("secret"))
        same = store.get_by_email("a@x.com")
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def create_user(self, email: str, password_hash: str) -> User:
        """Insert a new user and return it with id and created_at filled in.

        Raises sqlalchemy.exc.IntegrityError if the email already exists.
        """
        created_at = now_iso()
        with self.engine.connect() as conn:
            result = conn.execute(
                users.insert().values(
                    email=email,
                    password_hash=password_hash,
                    created_at=created_at,
                )
            )
            conn.commit()
        return User(
            id=result.inserted_primary_key[0],
            email=email,
            password_hash=password_hash,
            created_at=created_at,
        )

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(users.select().where(users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def count_users(self) -> int:
        """Return the number of registered users."""
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(users)).scalar()
        return result or 0


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
    )
