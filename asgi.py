"""
asgi.py -- ASGI entry point for the task list service.

The presentation layer is a separate single-page app; this process serves the
JSON API only.

Run with:  uvicorn asgi:app --reload
           python main.py serve
"""

from api.main import app

__all__ = ["app"]
