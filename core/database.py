"""
core/database.py -- Shared SQLAlchemy Core schema and engine factory.

Both stores (auth/store.py and tasks/store.py) read and write the same
database: tasks.user_id is a foreign key into users.id, so the two tables live
on one MetaData and one Engine. Each store owns its queries and row mappers;
this module owns only the table definitions and connection setup.

SQLAlchemy Core (not ORM) keeps the domain dataclasses authoritative. Swapping
SQLite for PostgreSQL is a connection string change.

Security: all queries in this project use bound parameters. No f-strings in SQL.

Layer rule: core/ is the kernel. No imports from api/, auth/, or tasks/.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, ForeignKey, Index, Integer, MetaData, String, Table, Text, create_engine, event
from sqlalchemy.engine import Engine

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),  # case-sensitive as stored
    Column("password_hash", Text, nullable=False),
    Column("created_at", String(32), nullable=False),
)

tasks = Table(
    "tasks",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    Column("title", Text, nullable=False),
    Column("completed", Integer, nullable=False, server_default="0"),  # boolean stored as 0/1
    Column("created_at", String(32), nullable=False),
    Index("ix_tasks_user_created", "user_id", "created_at"),
)


# ---------------------------------------------------------------------------
# Connection setup
# ---------------------------------------------------------------------------


def _configure_sqlite(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode and foreign key enforcement.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool. foreign_keys is OFF by default in SQLite.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


def make_engine(db_url: str) -> Engine:
    """Create an Engine for db_url and make sure both tables exist.

    Usage:
        engine = make_engine("sqlite:///./tasklist.db")
        users = UserStore(engine)
        tasks = TaskStore(engine)
        engine.dispose()
    """
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        # FastAPI runs sync handlers in a thread pool.
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _configure_sqlite)
    metadata.create_all(engine)
    return engine


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def now_iso() -> str:
    """Current UTC time as ISO 8601 with microseconds.

    Every timestamp in the database comes from here, so string order is time
    order.
    """
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")
