"""
api/main.py -- FastAPI application entry point for the task list service.

Run with:      uvicorn asgi:app --reload
               python main.py serve

Middleware stack (outermost to innermost):
  1. log_requests          -- one log line per request with status and latency
  2. CORSMiddleware        -- adds CORS headers for the configured front-end origins

Lifespan builds the shared resources once (engine, stores, token service,
auth service) and disposes of the engine on shutdown. The signing key enters
the process here, from Settings, and is handed to TokenService -- no other
module holds it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorDetail, ErrorResponse, HealthResponse
from api.routes.v1.auth import router as auth_router
from api.routes.v1.tasks import router as tasks_router
from auth.service import AuthService
from auth.store import UserStore
from auth.tokens import TokenService
from core.config import get_settings
from core.database import make_engine
from core.errors import TaskListError, Unauthorized
from tasks.store import TaskStore

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("tasklist.api")

_settings = get_settings()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create shared resources on startup; release them on shutdown.

    Everything before yield runs on startup; everything after yield runs on
    shutdown. The engine creates any missing tables on construction.
    """
    logger.info("Task list API starting up")
    app.state.engine = make_engine(_settings.database_url)
    app.state.user_store = UserStore(app.state.engine)
    app.state.task_store = TaskStore(app.state.engine)
    app.state.token_service = TokenService(_settings.secret_key, _settings.token_expire_seconds)
    app.state.auth_service = AuthService(
        app.state.user_store, app.state.token_service, _settings.bcrypt_rounds
    )
    logger.info("Database ready (%d registered users)", app.state.user_store.count_users())

    yield

    app.state.engine.dispose()
    logger.info("Task list API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Task List API",
    description="Private per-user todo lists behind email/password authentication.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)


# ---------------------------------------------------------------------------
# Request logging middleware
#
# Wraps every route. Logs method, path, status and latency -- never headers
# or bodies, which carry tokens and passwords.
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    # An unhandled exception re-raises out of call_next; the catch-all handler
    # outside this middleware answers it with 500.
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms %s",
            request.method,
            request.url.path,
            status_code,
            ms,
            request.client.host if request.client else "unknown",
        )


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api/v1", tags=["Auth"])
app.include_router(tasks_router, prefix="/api/v1", tags=["Tasks"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly without inspecting status codes to choose a schema.
# ---------------------------------------------------------------------------


def _error_response(status_code: int, code: str, message: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=ErrorDetail(code=code, message=message, detail=detail)).model_dump(),
    )


@app.exception_handler(TaskListError)
async def task_list_error_handler(request: Request, exc: TaskListError) -> JSONResponse:
    """Render every domain error from core.errors.

    The message comes from the exception class or a fixed string at the raise
    site, so nothing secret reaches the body.
    """
    response = _error_response(exc.status_code, exc.code, exc.message)
    if isinstance(exc, Unauthorized):
        response.headers["WWW-Authenticate"] = "Bearer"
    if exc.status_code >= 500:
        logger.error("%s on %s %s", exc.code, request.method, request.url.path)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 with structured error when request body or path params fail validation.

    Only field locations and error types are echoed back; input values are
    dropped because a rejected password would otherwise be reflected.
    """
    fields = ", ".join(".".join(str(p) for p in err.get("loc", ())) + f" ({err.get('type')})" for err in exc.errors())
    return _error_response(400, "validation_error", "Request validation failed.", fields or None)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Structured error for Starlette/FastAPI HTTP exceptions (404 route, 405 method)."""
    response = _error_response(exc.status_code, f"http_{exc.status_code}", str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception is written to the server log only, never to the
    response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _error_response(500, "internal_error", "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Health endpoint
#
# Defined directly in main.py (not in a router) so it is always reachable
# regardless of router registration state. No authentication.
# ---------------------------------------------------------------------------


@app.get("/api/v1/health", tags=["Health"])
def health(request: Request) -> HealthResponse:
    """Return API liveness, version, and whether the database answers."""
    database = "ok"
    try:
        with request.app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check could not reach the database")
        database = "error"
    return HealthResponse(status="ok" if database == "ok" else "degraded", version=__version__, database=database)
