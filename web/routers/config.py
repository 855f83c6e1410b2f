"""Configuration endpoints."""

from typing import Any

from fastapi import APIRouter

from buildsvc.config import get_settings

router = APIRouter()


@router.get("")
def get_config() -> dict[str, Any]:
    """Get effective configuration.

    Returns:
        Current configuration as JSON.
    """
    settings = get_settings()
    return {
        "http_addr": settings.http_addr,
        "log_level": settings.log_level,
        "server_url": settings.server_url,
        "client_timeout": settings.client_timeout,
    }
