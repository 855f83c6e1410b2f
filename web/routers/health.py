"""Health check endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from buildsvc import __version__
from buildsvc.store import BuildStore
from web.deps import get_build_store

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness check; never touches the build store."""
    return {"status": "ok", "version": __version__}


@router.get("/")
def root(store: BuildStore = Depends(get_build_store)) -> dict[str, Any]:
    """Service summary.

    Returns:
        API name, version and the number of stored builds.
    """
    return {
        "name": "Build Service API",
        "version": __version__,
        "builds": store.count(),
    }
