"""
core/errors.py -- Domain error taxonomy for the task list service.

Every failure a caller can observe is one of these classes. Each carries a
machine-readable code, the HTTP status the API layer answers with, and a
human-readable message. Stores and services raise them; api/main.py turns them
into the shared ErrorResponse envelope with a single exception handler.

Messages are fixed strings or caller-supplied field names. Nothing here ever
formats a password, a hash, a token, or the signing key into a message.

Layer rule: core/ is the kernel. This module has no imports from the project.
"""

from __future__ import annotations


class TaskListError(Exception):
    """Base class. Subclasses override the three class attributes."""

    code: str = "internal_error"
    status_code: int = 500
    message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or type(self).message
        super().__init__(self.message)


class ValidationError(TaskListError):
    """Missing or malformed input. User-correctable, no side effects."""

    code = "validation_error"
    status_code = 400
    message = "Request validation failed."


class DuplicateEmail(TaskListError):
    code = "duplicate_email"
    status_code = 409
    message = "Email already exists."


class InvalidCredentials(TaskListError):
    """Login failure. Identical for unknown email and wrong password."""

    code = "invalid_credentials"
    status_code = 401
    message = "Invalid email or password."


class Unauthorized(TaskListError):
    """Missing, malformed, forged or expired bearer token."""

    code = "unauthorized"
    status_code = 401
    message = "Authentication required."


class NotFound(TaskListError):
    code = "not_found"
    status_code = 404
    message = "Resource not found."


class InternalError(TaskListError):
    """Store or signing failure not attributable to caller input."""
