"""FastAPI web application for buildsvc.

This module provides the HTTP API that mirrors the build store.

All business logic is delegated to core modules in buildsvc/.
"""

from web.app import app, create_app

__all__ = ["app", "create_app"]
