"""
tasks/models.py -- Domain dataclass for a todo item.

Pure data container with zero logic. Ownership rules and validation live in
tasks/store.py.
"""

from dataclasses import dataclass


@dataclass
class Task:
    """One todo item.

    user_id is the owning account. It comes from the authenticated identity at
    creation time and never changes; no request field can set it.
    created_at is ISO 8601 UTC, set by the store on insert.
    """

    id: int
    user_id: int
    title: str
    completed: bool
    created_at: str
