"""
Mock API package.

Provides the FastAPI application: middleware pipeline, error handlers,
dependency container and the health and info routes.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
