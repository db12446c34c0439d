"""
tasks/store.py -- SQLAlchemy Core persistence for tasks, scoped by owner.

Pattern: Repository + Data Mapper, with the repository split in two:

  TaskStore     -- holds the Engine. Its only public operation is
                   for_owner(user_id), which returns an OwnedTasks.
  OwnedTasks    -- list/add/update/remove for exactly one owner. Every
                   statement it runs takes its WHERE clause from _owned(),
                   which always ANDs tasks.user_id == owner.

There is no method anywhere in this module that reads or writes tasks without
an owner id, so "forgot the user filter" cannot be written through the public
API. Route handlers get an OwnedTasks from the authenticated identity and
never see a bare TaskStore.

Foreign ids and ids too wide for SQLite behave exactly like missing ids:
update() raises NotFound for all of them, remove() silently does nothing. A
caller can never learn whether an id belongs to someone else.

Security: all queries use bound parameters. No f-strings in SQL.
"""

from __future__ import annotations

import logging

from sqlalchemy import and_
from sqlalchemy.engine import Engine

from core.database import now_iso
from core.database import tasks as _tasks
from core.errors import InternalError, NotFound, ValidationError
from tasks.models import Task

logger = logging.getLogger("tasklist.tasks")


class TaskStore:
    """Entry point for task persistence.

    Usage:
        store = TaskStore(engine)
        mine = store.for_owner(identity.user_id)
        task = mine.add("buy milk")
        mine.update(task.id, completed=True)
        mine.list()
        mine.remove(task.id)
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def for_owner(self, user_id: int) -> OwnedTasks:
        return OwnedTasks(self.engine, user_id)


class OwnedTasks:
    """Task operations bound to one owner. The owner cannot be changed after construction."""

    def __init__(self, engine: Engine, user_id: int) -> None:
        self._engine = engine
        self._user_id = user_id

    @property
    def user_id(self) -> int:
        return self._user_id

    def _owned(self, *criteria):
        """Build a WHERE clause that always includes the owner filter."""
        return and_(_tasks.c.user_id == self._user_id, *criteria)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> list[Task]:
        """Return the owner's tasks, newest first (ties broken by id, descending)."""
        with self._engine.connect() as conn:
            rows = conn.execute(
                _tasks.select().where(self._owned()).order_by(_tasks.c.created_at.desc(), _tasks.c.id.desc())
            ).fetchall()
        return [_row_to_task(r) for r in rows]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add(self, title: str) -> Task:
        """Insert a task for the owner with completed=False and return the stored row.

        Raises ValidationError if title is empty or only whitespace.
        """
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("title required")
        with self._engine.connect() as conn:
            result = conn.execute(
                _tasks.insert().values(
                    user_id=self._user_id,
                    title=title,
                    completed=0,
                    created_at=now_iso(),
                )
            )
            task_id = result.inserted_primary_key[0]
            row = conn.execute(_tasks.select().where(self._owned(_tasks.c.id == task_id))).fetchone()
            conn.commit()
        if row is None:
            logger.error("Task %s vanished after insert for user_id=%s", task_id, self._user_id)
            raise InternalError()
        logger.info("Task %s created for user_id=%s", task_id, self._user_id)
        return _row_to_task(row)

    def update(self, task_id: int, completed: bool) -> Task:
        """Set completed on one of the owner's tasks and return the updated row.

        Raises ValidationError if completed is not a bool, NotFound if the id
        does not exist or belongs to another user. In the NotFound case no row
        is modified.
        """
        if not isinstance(completed, bool):
            raise ValidationError("completed boolean required")
        if not _storable_id(task_id):
            raise NotFound("Task not found.")
        with self._engine.connect() as conn:
            result = conn.execute(
                _tasks.update().where(self._owned(_tasks.c.id == task_id)).values(completed=1 if completed else 0)
            )
            row = None
            if result.rowcount:
                row = conn.execute(_tasks.select().where(self._owned(_tasks.c.id == task_id))).fetchone()
            conn.commit()
        if row is None:
            raise NotFound("Task not found.")
        return _row_to_task(row)

    def remove(self, task_id: int) -> None:
        """Delete one of the owner's tasks.

        Idempotent: a missing id, an already-deleted id, and another user's
        id are all no-ops, not errors.
        """
        if not _storable_id(task_id):
            return
        with self._engine.connect() as conn:
            result = conn.execute(_tasks.delete().where(self._owned(_tasks.c.id == task_id)))
            conn.commit()
        if result.rowcount:
            logger.info("Task %s deleted for user_id=%s", task_id, self._user_id)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# SQLite INTEGER PRIMARY KEY is a signed 64-bit value; the driver refuses to
# bind anything wider, so such an id can never name a stored row.
_MAX_ROW_ID = 2**63 - 1


def _storable_id(task_id: int) -> bool:
    return -_MAX_ROW_ID - 1 <= task_id <= _MAX_ROW_ID


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_task(row) -> Task:
    return Task(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        completed=bool(row.completed),
        created_at=row.created_at,
    )
