"""Build management endpoints.

- POST /builds - Create a build (never overwrites)
- GET /builds/{id} - Get build by ID
- PUT /builds/{id} - Create or replace a build
- PATCH /builds/{id} - Update fields of an existing build
- DELETE /builds/{id} - Delete a build
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi import status as http_status

from buildsvc.errors import (
    BuildExistsError,
    BuildNotFoundError,
    BuildServiceError,
    InconsistentIDsError,
)
from buildsvc.models import Build, BuildPatch
from buildsvc.store import BuildStore
from web.deps import get_build_store

router = APIRouter()

_ERROR_STATUS: dict[type[BuildServiceError], int] = {
    BuildExistsError: http_status.HTTP_409_CONFLICT,
    BuildNotFoundError: http_status.HTTP_404_NOT_FOUND,
    InconsistentIDsError: http_status.HTTP_400_BAD_REQUEST,
}


def _http_error(exc: BuildServiceError) -> HTTPException:
    """Convert a build service error to an HTTP exception."""
    return HTTPException(
        status_code=_ERROR_STATUS.get(
            type(exc), http_status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        detail={"code": exc.code, "message": str(exc)},
    )


@router.post("", status_code=http_status.HTTP_201_CREATED)
def create_build_endpoint(
    build: Build,
    store: BuildStore = Depends(get_build_store),
) -> dict[str, Any]:
    """Create a new build.

    Args:
        build: Build record.
        store: Build store.

    Returns:
        The created build.

    Raises:
        HTTPException: 409 if the build ID already exists.
    """
    try:
        store.create(build)
    except BuildServiceError as e:
        raise _http_error(e) from None
    return build.to_dict()


@router.get("/{build_id:path}")
def get_build_endpoint(
    build_id: str,
    store: BuildStore = Depends(get_build_store),
) -> dict[str, Any]:
    """Get a build by ID.

    Raises:
        HTTPException: 404 if build not found.
    """
    try:
        return store.read(build_id).to_dict()
    except BuildServiceError as e:
        raise _http_error(e) from None


@router.put("/{build_id:path}")
def replace_build_endpoint(
    build_id: str,
    build: Build,
    store: BuildStore = Depends(get_build_store),
) -> dict[str, Any]:
    """Create or replace a build.

    Args:
        build_id: Build ID from the path.
        build: Full build record; its ID must match the path.
        store: Build store.

    Returns:
        The stored build.

    Raises:
        HTTPException: 400 if the path and body IDs differ.
    """
    try:
        store.replace(build_id, build)
    except BuildServiceError as e:
        raise _http_error(e) from None
    return build.to_dict()


@router.patch("/{build_id:path}")
def patch_build_endpoint(
    build_id: str,
    patch: BuildPatch,
    store: BuildStore = Depends(get_build_store),
) -> dict[str, Any]:
    """Update the given fields of an existing build.

    Fields that are omitted, null or empty are left unchanged.

    Args:
        build_id: Build ID from the path.
        patch: Fields to change.
        store: Build store.

    Returns:
        The build after the update.

    Raises:
        HTTPException: 400 if IDs differ, 404 if build not found.
    """
    try:
        return store.partial_update(build_id, patch).to_dict()
    except BuildServiceError as e:
        raise _http_error(e) from None


@router.delete("/{build_id:path}", status_code=http_status.HTTP_204_NO_CONTENT)
def delete_build_endpoint(
    build_id: str,
    store: BuildStore = Depends(get_build_store),
) -> Response:
    """Delete a build.

    Raises:
        HTTPException: 404 if build not found.
    """
    try:
        store.delete(build_id)
    except BuildServiceError as e:
        raise _http_error(e) from None
    return Response(status_code=http_status.HTTP_204_NO_CONTENT)
