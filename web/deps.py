"""Build store dependency for FastAPI.

Provides the application's build store to route handlers via FastAPI
dependency injection.
"""

from __future__ import annotations

from fastapi import Request

from buildsvc.store import BuildStore


def get_build_store(request: Request) -> BuildStore:
    """Get the build store from app state.

    Args:
        request: FastAPI request object.

    Returns:
        The application's build store.
    """
    store: BuildStore = request.app.state.build_store
    return store
