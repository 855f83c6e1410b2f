"""FastAPI application factory and main app.

This module creates the FastAPI application with all routers and
the build store it serves. The store is created once per application
and reached by routes through web.deps.get_build_store.
"""

from __future__ import annotations

from fastapi import FastAPI

from buildsvc import __version__
from buildsvc.store import BuildStore, InMemoryBuildStore
from web.routers import builds, config, health


def create_app(store: BuildStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Build store to serve; a fresh in-memory store if not given.

    Returns:
        Configured FastAPI application.
    """
    application = FastAPI(
        title="Build Service API",
        description="HTTP API for creating, reading, replacing, patching "
        "and deleting build records",
        version=__version__,
    )
    application.state.build_store = store if store is not None else InMemoryBuildStore()

    # Include routers
    application.include_router(health.router, tags=["health"])
    application.include_router(config.router, prefix="/config", tags=["config"])
    application.include_router(builds.router, prefix="/builds", tags=["builds"])

    return application


# Create the default application instance
app = create_app()
