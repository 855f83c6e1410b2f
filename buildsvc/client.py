"""HTTP client for the build server.

BuildClient implements the BuildStore interface against a running
server, translating error responses back into the exceptions the
in-memory store raises.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from buildsvc.errors import (
    BUILD_EXISTS,
    BUILD_NOT_FOUND,
    INCONSISTENT_IDS,
    BuildClientError,
    BuildExistsError,
    BuildNotFoundError,
    InconsistentIDsError,
)
from buildsvc.models import Build, BuildPatch

logger = logging.getLogger(__name__)

# Timeout for requests (seconds)
DEFAULT_TIMEOUT = 10.0


def _error_detail(response: httpx.Response) -> tuple[str | None, str]:
    """Extract (code, message) from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return None, response.text or response.reason_phrase
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, dict):
        return detail.get("code"), str(detail.get("message", ""))
    return None, str(detail if detail is not None else body)


class BuildClient:
    """Build store backed by the HTTP API.

    Args:
        base_url: Server base URL (e.g. http://localhost:8080).
        timeout: Request timeout in seconds.
        client: Optional preconfigured httpx client; base_url is ignored
            when given and the caller keeps ownership of it.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080",
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"), timeout=timeout
        )

    def __enter__(self) -> BuildClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        build_id: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug("%s %s", method, path)
        try:
            response = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise BuildClientError(f"Request to {path} failed: {e}") from e

        if response.is_success:
            return response

        code, message = _error_detail(response)
        if response.status_code == 404 and code == BUILD_NOT_FOUND:
            raise BuildNotFoundError(build_id)
        if response.status_code == 409 and code == BUILD_EXISTS:
            raise BuildExistsError(build_id)
        if response.status_code == 400 and code == INCONSISTENT_IDS:
            payload_id = (json or {}).get("id") or ""
            raise InconsistentIDsError(build_id, payload_id)
        raise BuildClientError(
            f"{method} {path} returned {response.status_code}: {message}",
            status_code=response.status_code,
        )

    @staticmethod
    def _path(build_id: str) -> str:
        return f"/builds/{quote(build_id, safe='')}"

    def create(self, build: Build) -> None:
        """Create a build on the server.

        Raises:
            BuildExistsError: If the build ID is already stored.
        """
        self._request("POST", "/builds", build.id, json=build.to_dict())

    def read(self, build_id: str) -> Build:
        """Get a build from the server.

        Raises:
            BuildNotFoundError: If no build is stored under the ID.
        """
        response = self._request("GET", self._path(build_id), build_id)
        return Build.model_validate(response.json())

    def replace(self, build_id: str, build: Build) -> None:
        """Create or overwrite a build on the server.

        Raises:
            InconsistentIDsError: If build.id differs from build_id.
        """
        if build.id != build_id:
            raise InconsistentIDsError(build_id, build.id)
        self._request("PUT", self._path(build_id), build_id, json=build.to_dict())

    def partial_update(self, build_id: str, patch: BuildPatch) -> Build:
        """Patch a build on the server.

        Raises:
            InconsistentIDsError: If patch.id is set and differs from build_id.
            BuildNotFoundError: If no build is stored under the ID.
        """
        if patch.id and patch.id != build_id:
            raise InconsistentIDsError(build_id, patch.id)
        response = self._request(
            "PATCH",
            self._path(build_id),
            build_id,
            json=patch.model_dump(exclude_none=True),
        )
        return Build.model_validate(response.json())

    def delete(self, build_id: str) -> None:
        """Delete a build on the server.

        Raises:
            BuildNotFoundError: If no build is stored under the ID.
        """
        self._request("DELETE", self._path(build_id), build_id)

    def count(self) -> int:
        """Return the number of builds stored on the server."""
        response = self._request("GET", "/", "")
        return int(response.json()["builds"])


__all__ = ["DEFAULT_TIMEOUT", "BuildClient"]
