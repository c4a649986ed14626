"""API routers for the REST API."""

from stonequote.web.routers.quote import router as quote_router

__all__ = ["quote_router"]
