"""
auth/service.py -- Registration and login (the unauthenticated entry points).

AuthService ties the credential store, the password hasher, and the token
service together. Route handlers call register()/login() and get back a token
string or one of the core.errors exceptions; they never see a User or a hash.

Security:
  Duplicate emails are detected by the store's UNIQUE constraint at insert
  time, never by a lookup first. Two racing registrations for the same email
  produce exactly one account and one DuplicateEmail.

  Login failures go through _reject(), the only place InvalidCredentials is
  built. Unknown email and wrong password therefore cannot drift apart in
  status, code, or message. Unknown emails still run one bcrypt check against
  self.dummy_hash, made at the same work factor as real digests, so response
  time does not reveal whether the account exists.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from auth.passwords import hash_password, verify_password
from auth.store import UserStore
from auth.tokens import TokenService
from core.config import DEFAULT_BCRYPT_ROUNDS
from core.errors import DuplicateEmail, InvalidCredentials, ValidationError

logger = logging.getLogger("tasklist.auth")


def _require_credentials(email: str | None, password: str | None) -> None:
    if not email or not password:
        raise ValidationError("email and password are required")


def _reject() -> InvalidCredentials:
    return InvalidCredentials()


class AuthService:
    """Usage:
    auth = AuthService(UserStore(engine), TokenService(settings.secret_key), settings.bcrypt_rounds)
    token = auth.register("a@x.com", "p")
    token = auth.login("a@x.com", "p")
    """

    def __init__(
        self,
        user_store: UserStore,
        token_service: TokenService,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ) -> None:
        self.user_store = user_store
        self.token_service = token_service
        self.bcrypt_rounds = bcrypt_rounds
        # Unknown-email logins verify against this so they cost one bcrypt check.
        self.dummy_hash = hash_password("tasklist_timing_dummy", bcrypt_rounds)

    def register(self, email: str | None, password: str | None) -> str:
        """Create an account and return a token for it.

        Raises ValidationError for empty fields, DuplicateEmail if the email
        is taken.
        """
        _require_credentials(email, password)
        password_hash = hash_password(password, self.bcrypt_rounds)
        try:
            user = self.user_store.create_user(email, password_hash)
        except IntegrityError as exc:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmail() from exc
        logger.info("Registered user_id=%s", user.id)
        return self.token_service.issue(user.id, user.email)

    def login(self, email: str | None, password: str | None) -> str:
        """Check credentials and return a fresh token.

        Raises ValidationError for empty fields, InvalidCredentials for an
        unknown email or a wrong password. The two are indistinguishable.
        """
        _require_credentials(email, password)
        user = self.user_store.get_by_email(email)
        if user is None:
            # Equalize timing -- do NOT return before running bcrypt
            verify_password(password, self.dummy_hash)
            raise _reject()
        if not verify_password(password, user.password_hash):
            raise _reject()
        logger.info("Login succeeded for user_id=%s", user.id)
        return self.token_service.issue(user.id, user.email)
