"""
api/routes/v1/auth.py -- Registration, login, and identity endpoints.

Routes:
  POST /api/v1/auth/register   -- create an account; returns a bearer token
  POST /api/v1/auth/login      -- password login; returns a bearer token
  GET  /api/v1/auth/me         -- identity carried by the token (requires auth)

Security:
  Both login failure modes (unknown email, wrong password) come out of
  AuthService as the same InvalidCredentials and render through the same
  exception handler, so the 401 bodies are byte-identical.
  Cache-Control: no-store on every response that carries a token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.models import CredentialsRequest, MeResponse, TokenResponse
from auth.dependencies import get_current_identity
from auth.models import Identity
from auth.service import AuthService

# Auth policy:
# - POST /api/v1/auth/register: public -- creating an account needs no prior auth
# - POST /api/v1/auth/login:    public -- login endpoint must be unauthenticated
# - GET  /api/v1/auth/me:       requires auth (get_current_identity)
router = APIRouter()


def _token_response(request: Request, token: str) -> JSONResponse:
    resp = JSONResponse(
        status_code=200,
        content=TokenResponse(
            token=token,
            token_type="bearer",  # noqa: S106 # nosec B106 -- OAuth token type, not a password
            expires_in=request.app.state.token_service.expire_seconds,
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/register", response_model=TokenResponse)
def register(request: Request, body: CredentialsRequest) -> JSONResponse:
    """Create an account and return a token for it.

    409 duplicate_email if the email is already registered. The uniqueness
    check is the database constraint itself, so concurrent registrations for
    one email cannot both succeed.
    """
    auth: AuthService = request.app.state.auth_service
    token = auth.register(body.email, body.password)
    return _token_response(request, token)


@router.post("/auth/login", response_model=TokenResponse)
def login(request: Request, body: CredentialsRequest) -> JSONResponse:
    """Authenticate with email and password; return a fresh token."""
    auth: AuthService = request.app.state.auth_service
    token = auth.login(body.email, body.password)
    return _token_response(request, token)


@router.get("/auth/me", response_model=MeResponse)
def me(identity: Identity = Depends(get_current_identity)) -> MeResponse:
    """Return the identity encoded in the caller's token."""
    return MeResponse(user_id=identity.user_id, email=identity.email)
