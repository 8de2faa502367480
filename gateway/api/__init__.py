"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from gateway.api import app

    uvicorn gateway.api:app --reload
"""

from gateway.api.app import app, create_app

__all__ = ["app", "create_app"]
