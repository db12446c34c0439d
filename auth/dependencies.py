"""
auth/dependencies.py -- FastAPI Depends() helper for bearer authentication.

Protected routes declare `identity: Identity = Depends(get_current_identity)`.
FastAPI resolves dependencies before it validates the request body, so an
unauthenticated call is answered with 401 before any business logic or input
validation runs.

The gate knows nothing about tasks and does not touch the database: a token
that verifies is enough. It reads the TokenService from app.state, where
api/main.py placed it during lifespan startup.

Layer rule: no imports from tasks/. auth/dependencies.py may import from
fastapi because it is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import Identity
from auth.tokens import InvalidToken, TokenService
from core.errors import Unauthorized

_BEARER_PREFIX = "bearer "


def _extract_bearer(request: Request) -> str | None:
    """Return the raw token from `Authorization: Bearer <token>`, or None.

    The scheme name is matched case-insensitively (RFC 7235).
    """
    header = request.headers.get("Authorization", "")
    if not header.lower().startswith(_BEARER_PREFIX):
        return None
    token = header[len(_BEARER_PREFIX) :].strip()
    return token or None


def get_current_identity(request: Request) -> Identity:
    """Require a valid bearer token. Raises Unauthorized (HTTP 401) otherwise.

    Use as a FastAPI dependency:
        @router.get("/tasks")
        def route(identity: Identity = Depends(get_current_identity)): ...
    """
    token = _extract_bearer(request)
    if token is None:
        raise Unauthorized()
    token_service: TokenService = request.app.state.token_service
    try:
        return token_service.verify(token)
    except InvalidToken as exc:
        raise Unauthorized("Invalid or expired token.") from exc
