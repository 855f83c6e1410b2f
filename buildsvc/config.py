"""Configuration settings for buildsvc.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from typing import Literal, get_args

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HTTP_HOST = "0.0.0.0"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


def parse_http_addr(addr: str) -> tuple[str, int]:
    """Split a listen address into host and port.

    Accepts "host:port" and ":port"; an empty host means all interfaces.

    Args:
        addr: Listen address.

    Returns:
        Tuple of (host, port).

    Raises:
        ValueError: If the address has no valid port.
    """
    host, sep, port_str = addr.rpartition(":")
    if not sep:
        raise ValueError(f"listen address must be [host]:port, got '{addr}'")
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"invalid port in listen address '{addr}'") from None
    if not 0 < port < 65536:
        raise ValueError(f"port out of range in listen address '{addr}'")
    host = host.strip("[]") or DEFAULT_HTTP_HOST
    return host, port


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the BUILDSVC_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDSVC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    http_addr: str = Field(
        default=":8080",
        description="HTTP listen address ([host]:port)",
    )
    log_level: LogLevel = Field(
        default="INFO",
        description="Logging level",
    )

    # Client
    server_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the build server used by client commands",
    )
    client_timeout: float = Field(
        default=10.0,
        ge=1,
        description="Timeout for client requests (seconds)",
    )

    @field_validator("http_addr")
    @classmethod
    def validate_http_addr(cls, v: str) -> str:
        """Validate the listen address can be split into host and port."""
        parse_http_addr(v)
        return v

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Validate server URL uses http or https."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"server_url must start with http:// or https://, got '{v}'")
        return v.rstrip("/")


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = [
    "LOG_LEVELS",
    "LogLevel",
    "Settings",
    "get_settings",
    "parse_http_addr",
    "print_settings_json",
]
