"""
API request and response models for the task list REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
tasks/models.py, which own the internal domain representation. Route handlers
map between the two.

No response model has a password or password_hash field. That is the
structural guarantee that a hash can never be serialized to a client.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from tasks.models import Task

# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class CredentialsRequest(BaseModel):
    """Request body for POST /api/v1/auth/register and /auth/login.

    Whitespace is not stripped: emails are matched exactly as stored and
    passwords are opaque. Empty strings are rejected by the service layer with
    the same validation_error an absent field gets here.
    """

    email: str = Field(max_length=255)
    password: str = Field(max_length=255)


class TokenResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    token_type: str = "bearer"
    expires_in: int


class MeResponse(BaseModel):
    """Response for GET /api/v1/auth/me -- the identity the token carries."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    email: str


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class TaskCreate(BaseModel):
    """Request body for POST /api/v1/tasks. There is no owner field to send."""

    title: str = Field(min_length=1, max_length=500)


class TaskPatch(BaseModel):
    """Request body for PATCH /api/v1/tasks/{task_id}.

    StrictBool refuses "true", 1, and other coercible values: completed must be
    a JSON boolean.
    """

    completed: StrictBool


class TaskResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    title: str
    completed: bool
    created_at: str

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            completed=task.completed,
            created_at=task.created_at,
        )


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/v1/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
    database: str = "ok"
