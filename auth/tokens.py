"""
auth/tokens.py -- Signed, time-bound identity tokens.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry sub (user id as string), user_id,
       email, iat and exp. The secret key is handed to TokenService at
       construction -- api/main.py builds one instance from Settings during
       lifespan startup and stores it on app.state. Nothing in this module
       reads configuration or keeps the key at module level.

  Expiry: every token lives Settings.token_expire_seconds (7 days by
       default). Verification compares exp against the verifier's own clock
       with no leeway.

  Revocation: none. A token stays valid until exp even if the account's
       password changes. That is a known limitation of stateless bearer
       tokens, not an oversight.

verify() raises InvalidToken on any failure. auth/dependencies.py turns that
into Unauthorized (HTTP 401). The exception message never includes the token.

Layer rule: no imports from api/ or tasks/.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from auth.models import Identity
from core.config import DEFAULT_TOKEN_EXPIRE_SECONDS
from core.errors import InternalError

logger = logging.getLogger("tasklist.auth")

ALGORITHM = "HS256"

# jose verifies exp when present but accepts a token without one unless told otherwise.
_REQUIRED_CLAIMS = {"require_exp": True, "require_iat": True, "require_sub": True}


class InvalidToken(Exception):
    """The token is malformed, forged, expired, or missing required claims."""


class TokenService:
    """Issues and verifies bearer tokens with one process-wide secret.

    Usage:
        tokens = TokenService(settings.secret_key, settings.token_expire_seconds)
        token = tokens.issue(user.id, user.email)
        identity = tokens.verify(token)  # Identity(user_id=..., email=...)
    """

    def __init__(self, secret_key: str, expire_seconds: int = DEFAULT_TOKEN_EXPIRE_SECONDS) -> None:
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key.")
        if expire_seconds <= 0:
            raise ValueError("expire_seconds must be positive.")
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def __repr__(self) -> str:
        # Keep the key out of tracebacks and debug output.
        return f"TokenService(expire_seconds={self.expire_seconds})"

    def issue(self, user_id: int, email: str) -> str:
        """Encode a signed JWT for the given identity."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "user_id": user_id,
            "email": email,
            "iat": now,
            "exp": now + timedelta(seconds=self.expire_seconds),
        }
        try:
            return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)
        except JWTError as exc:
            logger.error("Token signing failed for user_id=%s", user_id)
            raise InternalError() from exc

    def verify(self, token: str) -> Identity:
        """Decode and verify a JWT. Returns the Identity it carries.

        Raises InvalidToken if the signature does not match, the token cannot
        be parsed, exp has passed, or user_id/email are missing or mistyped.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM], options=_REQUIRED_CLAIMS)
        except JWTError as exc:
            raise InvalidToken("token failed verification") from exc

        user_id = payload.get("user_id")
        email = payload.get("email")
        # bool is an int subclass
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidToken("token is missing user_id")
        if not isinstance(email, str) or not email:
            raise InvalidToken("token is missing email")
        if payload.get("sub") != str(user_id):
            raise InvalidToken("token subject does not match user_id")
        return Identity(user_id=user_id, email=email)
