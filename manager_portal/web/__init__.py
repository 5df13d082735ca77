"""FastAPI application, page routes and templates."""

from manager_portal.web.app import create_app

__all__ = ["create_app"]
