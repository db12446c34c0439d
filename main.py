#!/usr/bin/env python3
"""
Task list service -- command line entry point.

Usage:
  python main.py serve
  python main.py serve --host 0.0.0.0 --port 8000 --reload
  python main.py init-db
  python main.py init-db --database-url sqlite:///./other.db

Environment variables (see core/config.py for the full list):
  SECRET_KEY     Token signing key, at least 32 characters. Required unless DEBUG=true.
  DATABASE_URL   SQLAlchemy URL. Default sqlite:///./tasklist.db
  PORT           Listen port for `serve`. Default 4000.
"""

import argparse
import logging

from core.config import get_settings
from core.database import make_engine


def _serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "asgi:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
    )


def _init_db(args: argparse.Namespace) -> None:
    url = args.database_url or get_settings().database_url
    engine = make_engine(url)
    engine.dispose()
    print(f"Schema ready at {engine.url.render_as_string(hide_password=True)}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s %(message)s")

    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="Multi-user task list API.",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default=None, help="Bind address (default: HOST setting).")
    serve.add_argument("--port", type=int, default=None, help="Listen port (default: PORT setting).")
    serve.add_argument("--reload", action="store_true", help="Restart on code changes (development only).")
    serve.set_defaults(func=_serve)

    init_db = sub.add_parser("init-db", help="Create the users and tasks tables if missing.")
    init_db.add_argument("--database-url", default=None, help="SQLAlchemy URL (default: DATABASE_URL setting).")
    init_db.set_defaults(func=_init_db)

    args = parser.parse_args()
    if not getattr(args, "func", None):
        parser.print_help()
        return
    args.func(args)


if __name__ == "__main__":
    main()
