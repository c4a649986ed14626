"""FastAPI REST API for stone quoting.

Usage:
    uvicorn stonequote.web:app --reload
"""

from stonequote.web.app import app, create_app

__all__ = ["app", "create_app"]
