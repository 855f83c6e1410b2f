"""Build store module.

This module provides the build store API:
- BuildStore: the interface shared by the in-memory store and the HTTP client
- InMemoryBuildStore: a keyed map of builds guarded by one reader/writer lock

Each mutating operation runs its existence check and its mutation inside a
single exclusive critical section. Separate calls are not atomic as a unit.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from buildsvc.errors import BuildExistsError, BuildNotFoundError, InconsistentIDsError
from buildsvc.locks import ReadWriteLock
from buildsvc.models import Build, BuildPatch

logger = logging.getLogger(__name__)


@runtime_checkable
class BuildStore(Protocol):
    """CRUD interface for build records."""

    def create(self, build: Build) -> None:
        """Store a new build; never overwrites."""
        ...

    def read(self, build_id: str) -> Build:
        """Return the build stored under an ID."""
        ...

    def replace(self, build_id: str, build: Build) -> None:
        """Store a build under an ID, creating or overwriting it."""
        ...

    def partial_update(self, build_id: str, patch: BuildPatch) -> Build:
        """Overwrite the specified fields of an existing build."""
        ...

    def delete(self, build_id: str) -> None:
        """Remove the build stored under an ID."""
        ...

    def count(self) -> int:
        """Return the number of stored builds."""
        ...


class InMemoryBuildStore:
    """Thread-safe in-memory build store.

    Reads share the lock; create, replace, partial_update and delete hold
    it exclusively. Builds are immutable models, so returned records can
    be handed to callers without copying.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._builds: dict[str, Build] = {}

    def create(self, build: Build) -> None:
        """Store a new build.

        Args:
            build: Build to store.

        Raises:
            BuildExistsError: If a build with the same ID is already stored.
        """
        with self._lock.write_locked():
            if build.id in self._builds:
                logger.debug("Rejected create of existing build %s", build.id)
                raise BuildExistsError(build.id)
            self._builds[build.id] = build
        logger.info("Created build %s", build.id)

    def read(self, build_id: str) -> Build:
        """Get a build by ID.

        Args:
            build_id: Build ID.

        Returns:
            The stored build.

        Raises:
            BuildNotFoundError: If no build is stored under the ID.
        """
        with self._lock.read_locked():
            build = self._builds.get(build_id)
        if build is None:
            logger.debug("Build %s not found", build_id)
            raise BuildNotFoundError(build_id)
        return build

    def replace(self, build_id: str, build: Build) -> None:
        """Store a build under an ID whether or not one already exists.

        Args:
            build_id: Target build ID.
            build: Full replacement record.

        Raises:
            InconsistentIDsError: If build.id differs from build_id.
        """
        if build.id != build_id:
            logger.debug("Rejected replace of %s with build %s", build_id, build.id)
            raise InconsistentIDsError(build_id, build.id)
        with self._lock.write_locked():
            existed = build_id in self._builds
            self._builds[build_id] = build
        logger.info("%s build %s", "Replaced" if existed else "Created", build_id)

    def partial_update(self, build_id: str, patch: BuildPatch) -> Build:
        """Overwrite the non-empty fields of an existing build.

        Args:
            build_id: Target build ID.
            patch: Fields to change. Empty or absent fields are left as is.

        Returns:
            The build as stored after the update.

        Raises:
            InconsistentIDsError: If patch.id is set and differs from build_id.
            BuildNotFoundError: If no build is stored under the ID.
        """
        if patch.id and patch.id != build_id:
            logger.debug("Rejected patch of %s with build %s", build_id, patch.id)
            raise InconsistentIDsError(build_id, patch.id)
        with self._lock.write_locked():
            existing = self._builds.get(build_id)
            if existing is None:
                logger.debug("Build %s not found for patch", build_id)
                raise BuildNotFoundError(build_id)
            updated = patch.apply(existing)
            self._builds[build_id] = updated
        logger.info("Patched build %s", build_id)
        return updated

    def delete(self, build_id: str) -> None:
        """Remove a build.

        Args:
            build_id: Build ID.

        Raises:
            BuildNotFoundError: If no build is stored under the ID.
        """
        with self._lock.write_locked():
            if self._builds.pop(build_id, None) is None:
                logger.debug("Build %s not found for delete", build_id)
                raise BuildNotFoundError(build_id)
        logger.info("Deleted build %s", build_id)

    def count(self) -> int:
        """Return the number of stored builds."""
        with self._lock.read_locked():
            return len(self._builds)


__all__ = ["BuildStore", "InMemoryBuildStore"]
