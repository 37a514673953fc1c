"""
Jotter API package.

Provides the FastAPI application for the Jotter notes service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
